import pathlib

from setuptools import find_packages, setup

BASE_DIR = pathlib.Path(__file__).resolve().parent
exec((BASE_DIR / "specrun/_version.py").read_text())


setup(
    name="specrun",
    version=__version__,  # type: ignore[name-defined]  # NOQA: F821
    packages=find_packages(exclude=["tests", "tests.*"]),
    description="A command-line front end for running specs with pytest.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    license="MIT License",
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX",
        "Operating System :: MacOS",
        "Operating System :: Unix",
        "Framework :: Pytest",
    ],
    install_requires=[
        "colorlog>=4.0.0",
        "dacite>=1.1.0,<2.0.0",
        "pytest>=7.0.0",
        "pytest-xdist>=2.0.0",
        "tomlkit>=0.11.0,<1.0.0",
    ],
    package_data={
        "specrun": [
            "py.typed",
            "examples/*.toml",
            "examples/lib/specrun_examples/*.py",
            "examples/spec/specrun_examples/*.py",
            "examples/spec/helpers/specrun_examples/*.py",
        ]
    },
    entry_points={"console_scripts": ["specrun=specrun.cli:cli"]},
)
