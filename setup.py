from setuptools import setup, find_packages

setup(
    name="bigten_pred",
    version="0.1",
    packages=find_packages(include=["bigten_pred", "bigten_pred.*"]),
    install_requires=[
        "pandas",
        "numpy",
        "scikit-learn",
        "lightgbm"
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.10",
)
