from setuptools import setup, find_packages

setup(
    name="sprig",
    version="0.1.0",
    description="Template and decorator compiler producing JSX modules",
    author="Sprig Team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "libsass",
        "tree-sitter>=0.22",
        "tree-sitter-typescript>=0.23",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
