from setuptools import setup, find_packages

setup(
    name="sudoscan",
    version="1.0.0",
    description="Propagation and scanning Sudoku solver for 9x9 and 16x16 grids",
    author="robomotic",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "matplotlib>=3.6.0",
        "seaborn>=0.11.0",
        "tqdm>=4.62.0",
    ],
    extras_require={
        "dev": ["pytest>=7.0.0"],
    },
    entry_points={
        "console_scripts": [
            "sudoscan=sudoscan.cli:main",
        ],
    },
)
