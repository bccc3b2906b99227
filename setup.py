"""Setup script for icsnorm."""

from pathlib import Path

from setuptools import find_packages, setup

README = Path(__file__).parent / "README.md"
REQUIREMENTS = Path(__file__).parent / "requirements.txt"


def read_requirements(path):
    """Split requirements.txt into (install, test) lists.

    Test tooling (pytest and its plugins) goes to the test extra.
    """
    install, test = [], []
    if not path.exists():
        return install, test
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.split("#", 1)[0].strip()
        if not line:
            continue
        (test if line.startswith("pytest") else install).append(line)
    return install, test


install_requirements, test_requirements = read_requirements(REQUIREMENTS)

setup(
    name="icsnorm",
    version="0.1.0",
    description="Normalize iCalendar documents into single and recurring event records",
    long_description=README.read_text(encoding="utf-8") if README.exists() else "",
    long_description_content_type="text/markdown",
    author="icsnorm contributors",
    # Package configuration
    packages=find_packages(exclude=["tests*", "docs*"]),
    include_package_data=True,
    # Dependencies
    install_requires=install_requirements,
    extras_require={
        "dev": test_requirements
        + [
            "black>=23.0.0",
            "isort>=5.12.0",
            "mypy>=1.0.0",
        ],
        "test": test_requirements,
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Office/Business :: Scheduling",
    ],
    keywords="calendar ics icalendar rrule recurrence timezone",
    entry_points={
        "console_scripts": [
            "icsnorm=icsnorm.__main__:main",
        ],
    },
    zip_safe=False,
)
