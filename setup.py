from setuptools import setup

setup(
    name="prdf",
    version="0.1",
    description="Partial and total radial distribution functions of periodic atomic configurations",
    packages=["prdf"],
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "matplotlib",
        "ase",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["prdf = prdf.cli:main"],
    },
)
