"""
StrapiGen - Strapi module generator for existing MySQL schemas
Install: pip install -e .
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="strapigen",
    version="0.1.0",
    author="StrapiGen contributors",
    author_email="",
    description="Generate Strapi content types, controllers, services and routes from a database schema",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["strapigen", "strapigen.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Code Generators",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "sqlalchemy>=2.0.0",
        "pymysql>=1.0.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=23.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "strapigen=strapigen.cli:main",
        ],
    },
    keywords="strapi, generator, mysql, schema, code-generator, scaffolding",
)
