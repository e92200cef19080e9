from setuptools import find_packages, setup

setup(
    name="playtracks",
    version="1.0.0",
    description="Print the highest version code live on Google Play tracks",
    packages=find_packages(include=["playtracks", "playtracks.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "python-dotenv>=1.0",
        "rich>=13.0",
        "jmespath>=1.0",
        "google-api-python-client>=2.0",
        "google-auth>=2.0",
        "google-auth-httplib2>=0.1",
        "httplib2>=0.20",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "playtracks=playtracks.cli.main:main",
        ],
    },
)
