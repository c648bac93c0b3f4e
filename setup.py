"""
Setup script for SmartPDF.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="smartpdf-docx",
    version="1.0.0",
    description="Convert PDF pages into structured, editable Word documents using Gemini document understanding",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="SmartPDF Contributors",
    author_email="",
    packages=find_packages(include=["smartpdf", "smartpdf.*"]),
    install_requires=[
        "pypdf>=3.0.0",
        "python-docx>=1.0.0",
        "pydantic>=2.0.0",
        "google-generativeai>=0.7.0",
        "python-dotenv>=1.0.0",
        "click>=8.0.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "smartpdf=smartpdf.cli:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Text Processing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf docx word convert gemini structure headings pages ranges chunks",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
