from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="neuronlab",
    version="0.1.0",
    description="Interactive single artificial neuron simulator with a live activation plot",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["neuronlab", "neuronlab.*"]),
    install_requires=[
        "dash>=2.14.0",
        "dash-bootstrap-components>=1.5.0",
        "plotly>=5.17.0",
        "pyyaml>=6.0",
        "numpy>=1.24.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "neuronlab=neuronlab.dashboard:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.10",
    ],
)
