from setuptools import setup, find_packages

setup(
    name="bond_valuation",
    version="0.1.0",
    description="Bond valuation engine: present-value price, cash-flow schedule, premium/discount",
    packages=find_packages(include=["bond_valuation", "bond_valuation.*"]),
    install_requires=[
        "numpy",
        "pandas",
        "scipy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "bond-valuation=bond_valuation.cli:main",
        ],
    },
    python_requires=">=3.8",
)
