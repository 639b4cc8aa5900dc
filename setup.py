from setuptools import setup, find_packages

setup(
    name="mtg_set_builder",
    version="0.1.0",
    packages=find_packages(include=["mtg_set_builder", "mtg_set_builder.*"]),
    package_data={"mtg_set_builder": ["config/*.ini"]},
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
