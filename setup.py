# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="structure-builder",
    version="1.0.0",
    description="Build project file trees from pasted listings and publish them to GitHub or Hugging Face Spaces",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["structure_builder*"]),
    package_data={
        "structure_builder.interface.locales": ["*.json"],
    },
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.28",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        'console_scripts': [
            'structure-builder=structure_builder.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
