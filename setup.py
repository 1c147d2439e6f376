from __future__ import annotations

from setuptools import find_packages, setup

from config_loadr.version import PROJECT_VERSION, PYTHON_REQUIRES_SPECIFIER

if __name__ == "__main__":
    setup(
        name="config-loadr",
        version=PROJECT_VERSION,
        description="Typed, self-documenting configuration loaded from environment variables",
        python_requires=PYTHON_REQUIRES_SPECIFIER,
        packages=find_packages(include=["config_loadr", "config_loadr.*"]),
        package_data={"config_loadr": ["VERSION"]},
        install_requires=[
            "pydantic>=2.0",
            "python-dotenv>=1.0",
            "loguru>=0.7",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
                "hypothesis>=6.0",
            ],
        },
        entry_points={
            "console_scripts": ["config-loadr=config_loadr.cli:main"],
        },
    )
