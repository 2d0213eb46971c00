from setuptools import setup, find_packages


setup(
    version="0.1.0",
    name="aionetwork",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "aiohttp>=3.8.0",
        "yarl>=1.8.0",
        "attrs>=21.3.0",
    ],
    extras_require={
        "httpx": ["httpx>=0.23.0"],
        "orjson": ["orjson>=3.6.0"],
        "tests": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.23.0",
        ],
    },
)
