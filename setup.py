from setuptools import setup, find_packages

setup(
    name="march-madness-seed-calculator",
    version="1.1.0",
    description="Historical NCAA tournament win percentages by seed matchup",
    author="Ben Rosen",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "pytz>=2022.7",
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=4.9.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.9",
    entry_points={
        "console_scripts": [
            "seedcalc=seedcalc.main:main",
        ],
    },
)
