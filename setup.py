from setuptools import setup, find_namespace_packages

setup(
    name="graph-delta-regions",
    version="0.1",
    packages=find_namespace_packages(include=["delta_regions", "delta_regions.*"]),
    py_modules=["main"],
    install_requires=[
        "networkx>=2.8",
        "numpy>=1.22",
        "matplotlib>=3.5",
        "pandas>=1.4",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
)
