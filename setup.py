from setuptools import setup, find_packages

setup(
    name="ablescript",
    version="0.1.0",
    description="AbleScript front end: spanned lexer and left-to-right expression parser",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="AbleScript Project",
    python_requires=">=3.8",
    packages=find_packages(),
    entry_points={
        "console_scripts": [
            "ablescript=ablescript.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Software Development :: Compilers",
    ],
)
