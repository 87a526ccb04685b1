# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="metatree",
    version="0.1.0",
    description="File tree indexing and rendering for metafile file lists",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["metatree", "metatree.*"]),
    install_requires=[
        "rich>=12.0",  # Styles and display-width handling in the tree renderer
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'metatree=metatree.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
