from setuptools import find_packages, setup

setup(
    name="pytest-uidtracking",
    version="0.1.0",
    author="Kim Gustyr",
    author_email="khvn26@gmail.com",
    entry_points={"pytest11": ["uidtracking = pytest_uidtracking.plugin"]},
    packages=find_packages(
        include=["*"],
        exclude=["tests*"],
    ),
    python_requires=">=3.8.1",
    install_requires=[
        "pytest",
        "pydantic>=2",
    ],
    extras_require={
        "test": ["hypothesis", "pytest-xdist"],
    },
)
