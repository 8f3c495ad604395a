"""
Minimal envbind example.
Loads .env (if present), binds the environment into a dataclass and prints it.

    PROD=true PORTS=3000,3001 HOSTS=a:b:c python -m examples.basic
"""

import sys
from dataclasses import dataclass, field
from typing import Annotated

from dotenv import load_dotenv

from envbind import BindError, Env, Default, Separator, UInt8, bind


@dataclass
class Environments:
    """Settings read by the example."""

    intent: Annotated[int, Env("INTENT")] = 0
    ports: Annotated[list[int], Env("PORTS"), Default("3000")] = field(default_factory=list)
    is_prod: Annotated[bool, Env("PROD,required")] = False
    is_dev: Annotated[bool, Env("DEV")] = False
    hosts: Annotated[list[UInt8], Env("HOSTS"), Separator(":")] = field(default_factory=list)


def main() -> int:
    load_dotenv()

    env = Environments()
    try:
        bind(env)
    except BindError as e:
        print(e, file=sys.stderr)
        return 1

    print(env)
    return 0


if __name__ == "__main__":
    sys.exit(main())
