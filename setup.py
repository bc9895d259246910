"""
Setup configuration for the chordstrum package.

This allows you to install the project with:
    pip install -e .

After installation, you can import modules like:
    from chordstrum.app.generate import generate_midi
    from chordstrum.rules.strumming import PATTERNS
"""

from setuptools import setup, find_packages

# Read the README for long description
with open("README.md", "r", encoding="utf-8") as f:
    long_description = f.read()

setup(
    # -------------------------
    # Basic Package Information
    # -------------------------
    name="chordstrum",
    version="0.1.0",
    description="Chord progressions to Standard MIDI Files with strum, pick and arpeggio patterns",
    long_description=long_description,
    long_description_content_type="text/markdown",

    # -------------------------
    # Package Discovery
    # -------------------------
    packages=find_packages(where=".", exclude=["tests", "tests.*"]),
    package_dir={"": "."},

    # -------------------------
    # Python Version Requirement
    # -------------------------
    python_requires=">=3.9",

    # -------------------------
    # Dependencies
    # -------------------------
    install_requires=[
        "pydantic>=2.0.0",
        "fastapi>=0.100.0",
        "mido>=1.3.0",
    ],

    # Optional dependencies (install with pip install -e ".[dev]")
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "httpx>=0.24.0",
            "flake8>=6.1.0",
            "black>=23.7.0",
            "mypy>=1.5.0",
        ],
        "app": [
            "uvicorn>=0.23.0",
        ],
    },

    # -------------------------
    # Entry Points (CLI commands)
    # -------------------------
    entry_points={
        "console_scripts": [
            # chordstrum C Am F G --pattern pop-strum
            "chordstrum=chordstrum.app.cli:main",
            "chordstrum-api=chordstrum.app.api:main",
        ],
    },

    # -------------------------
    # Metadata
    # -------------------------
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Multimedia :: Sound/Audio :: MIDI",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    keywords="guitar, midi, chord progression, strumming, arpeggio, transpose",
)
