import os.path
import re

from setuptools import setup

here = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(here, "nprijndael", "__init__.py")) as f:
    __version__ = re.search(r'^__version__ = "([^"]+)"', f.read(), re.M).group(1)

setup(
    name="nprijndael",
    version=__version__,
    description="Rijndael (AES) block cipher core: NumPy T-table implementation",
    license="Apache 2.0",
    keywords=[
        "aes", "aes-128", "aes-192", "aes-256", "rijndael", "block cipher",
        "key schedule", "encryption", "decryption", "numpy", "symmetric",
    ],
    packages=["nprijndael"],
    long_description=open(os.path.join(here, "README.md")).read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Topic :: Security :: Cryptography",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
    ],
    python_requires=">=3.7",
    install_requires=["numpy>=1.16", "pycryptodome>=3.9"],
    extras_require={"test": ["pytest"]},
)
