# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="readme4ai",
    version="1.0.0",
    description="Generate the README of a source file with an OpenAI chat model",
    packages=find_namespace_packages(where="src", include=["readme4ai*"]),
    package_dir={"": "src"},
    package_data={"readme4ai.interface.locales": ["*.json"]},
    python_requires=">=3.8",
    install_requires=[
        "requests",
        "tiktoken",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'readme4ai=readme4ai.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
