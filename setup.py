from setuptools import find_packages, setup

setup(
    name="mesa_discrete",
    packages=find_packages(include=["mesa_discrete", "mesa_discrete.*"]),
    version="0.1.0.dev0",
    description="An occupancy index with randomized selection and placement for the discrete spaces of agent-based models",
    author="Project Mesa, Adam Amer",
    license="MIT License",
    python_requires=">=3.11",
    install_requires=[
        "numpy>=1.26",
        "polars>=1.0",
        "typing_extensions>=4.9",
        "beartype>=0.18",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-cov",
            "typer>=0.9",
        ],
        "benchmarks": [
            "typer>=0.9",
        ],
        "dev": [
            "mesa_discrete[test,benchmarks]",
        ],
    },
)
