from setuptools import setup, find_packages

setup(
    name="gen-env",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "rich>=13.0.0",
        "networkx>=3.0",
        "tomli>=2.0.0",
        "requests>=2.31.0",
    ],
    extras_require={
        'test': [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'gen-env=src.__main__:run_main',
        ],
    },
)
