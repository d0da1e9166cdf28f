import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="params_coerce",
    version="0.1.0",
    author="params_coerce contributors",
    description="Let your classes coerce parameters into the objects they need.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=[
        "structlog>=23.1",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires='>=3.9',
)
