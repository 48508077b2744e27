from setuptools import setup, find_packages

setup(
    name="cmdspec",
    version="0.1.0",
    description="Template driven command line parsing, dispatch and help text.",
    author="Roland Thomas Jr",
    author_email="roland@rtj.dev",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "rich>=13",
        "pydantic>=2",
        "pyyaml>=6",
        "toml>=0.10",
        "python-json-logger>=3.1",
        "python-dateutil>=2.8",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "cmdspec=cmdspec.__main__:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
    ],
)
