import pathlib
import setuptools

# The directory containing this file
HERE = pathlib.Path(__file__).parent

README_PATH = HERE / "README.md"
README = README_PATH.read_text() if README_PATH.exists() else ""

# This call to setup() does all the work
setuptools.setup(
    name="lpreader",
    version="0.1.0",
    description="Reader for linear and quadratic programming models in the LP file format",
    long_description=README,
    long_description_content_type="text/markdown",
    license="MIT",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Topic :: Scientific/Engineering",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Intended Audience :: Science/Research",
        "Development Status :: 2 - Pre-Alpha",
    ],
    packages=setuptools.find_packages(include=["lpreader", "lpreader.*"]),
    python_requires=">=3.8",
    include_package_data=True,
    install_requires=["numpy>=1.21.2", "ordered-set>=4.0.2"],
    extras_require={"test": ["pytest"]},
)
