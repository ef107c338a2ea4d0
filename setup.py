# setup.py
from setuptools import setup, find_packages

setup(
    name="link_scout",
    version="0.1.0",
    description="Асинхронный поиск битых ссылок на сайте LinkScout",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"link_scout": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.2",
        "Jinja2>=3.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["link-scout=link_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
