"""Setup configuration for the Media Browser search package."""

from setuptools import setup, find_packages

setup(
    name="media-browser-search",
    version="1.0.0",
    description="Search and filter state synchronization for a media catalog browser",
    author="Alex",
    author_email="",
    packages=find_packages(include=["config", "config.*", "src", "src.*", "api", "api.*"]),
    package_data={"config": ["ui_config.yaml"]},
    python_requires=">=3.11",
    install_requires=[
        "httpx>=0.26.0",
        "tenacity>=8.2.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
        "fastapi>=0.110.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
        "uvicorn>=0.27.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "black>=24.1.0",
            "ruff>=0.2.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "media-presets-api=api.main:main",
        ],
    },
)
