"""Packaging information for sftpbridge."""

import sys

import setuptools

from sftpbridge.constants import VERSION

if sys.version_info[:3] < (3, 8, 0):
    print("sftpbridge requires Python 3.8 to run.")
    sys.exit(1)

install_requires = [
    "paramiko>=3.2.0",
    "fastapi>=0.100.0",
    "uvicorn>=0.22.0",
    "anyio>=3.7.0",
]

extras_require = {
    "dev": [
        "flake8>=3.7.9",
        "flake8-docstrings>=1.5.0",
        "flake8-import-order>=0.18.1",
        "black>=19.10b0",
        "mypy>=0.770",
        "pytest>=5.4.1",
        "pytest-cov>=2.8.1",
        "httpx>=0.24.0",
    ]
}


def _long_description():
    with open("README.md") as f:
        return f.read()


setuptools.setup(
    name="sftpbridge",
    version=VERSION,
    description="Serve a remote SFTP file system as read-only HTTP.",
    long_description=_long_description(),
    long_description_content_type="text/markdown",
    license="GPLv3+",
    packages=setuptools.find_packages(),
    entry_points={"console_scripts": ["sftpbridge = sftpbridge.__main__:main"]},
    install_requires=install_requires,
    extras_require=extras_require,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: No Input/Output (Daemon)",
        "Programming Language :: Python :: 3",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: POSIX :: Linux",
        "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
        "Topic :: System :: Filesystems",
    ],
    python_requires=">=3.8",
)
