from setuptools import setup, find_packages


def scm_version():
    def local_scheme(version):
        return version.format_choice("+{node}", "+{node}.dirty")
    return {
        "root": ".",
        "relative_to": __file__,
        "version_scheme": "guess-next-dev",
        "local_scheme": local_scheme,
        "fallback_version": "0.1.0",
    }


setup(
    name="ztex",
    use_scm_version=scm_version(),
    description="Descriptor and status decoding for ZTEX USB-FPGA modules",
    license="0-clause BSD License",
    python_requires=">=3.8",
    setup_requires=[
        "setuptools",
        "setuptools_scm"
    ],
    install_requires=[
        "libusb1>=1.8.1",
    ],
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
        "console_scripts": [
            "ztex = ztex.cli:main"
        ],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved', # ' :: 0-clause BSD License', (not in PyPI)
        'Topic :: Software Development :: Embedded Systems',
        'Topic :: System :: Hardware',
    ],
)
