from setuptools import find_namespace_packages, setup

setup(
    name="settings-console",
    version="0.1.0",
    packages=find_namespace_packages(include=["src", "src.*"]),
    package_data={"src.core.config": ["schemas/*.yaml"]},
    install_requires=[
        "pydantic>=2.0",
        "structlog>=23.1",
        "PyYAML>=6.0",
        "jsonschema>=4.0",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "settings-console=src.core.cli:main",
        ],
    },
    author="Your Name",
    author_email="your.email@example.com",
    description="Grammar-matched CLI commands for reading and writing stored settings.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/settings-console",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
