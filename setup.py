from setuptools import setup, find_packages

setup(
    name="banachfp",
    version="1.0.0",
    description="Certified fixed-point iteration for contraction mappings with a priori error bounds",
    author="banachfp developers",
    python_requires=">=3.10",
    packages=find_packages(include=["banachfp", "banachfp.*"]),
    install_requires=[
        "numpy>=1.24.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering :: Mathematics",
    ],
)
