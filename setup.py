# setup.py
from setuptools import setup, find_packages

setup(
    name="serp_scout",
    version="0.1.0",
    description="SerpScout: SEO-проверки HTML и оценка ширины сниппетов в выдаче",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"serp_scout": ["templates/*.j2"]},
    install_requires=[
        "click>=8.1",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "Jinja2>=3.1",
        "lxml>=4.9",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["serp-scout=serp_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
