# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="columnlog",
    version="0.1.0",
    description="Leveled console and file logging with fixed-column lines and size-based rotation",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["columnlog", "columnlog.*"]),
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Topic :: System :: Logging",
    ],
)
