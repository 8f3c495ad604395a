from setuptools import setup, find_packages

setup(
    name="envbind",
    version="0.1.0",
    description="Bind environment variables into typed dataclass and pydantic config records",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    install_requires=[
        "pydantic>=2.0.0",
    ],
    extras_require={
        "examples": ["python-dotenv>=1.0.0"],
        "test": ["pytest>=7.0.0", "python-dotenv>=1.0.0"],
    },
    python_requires=">=3.10",
)
