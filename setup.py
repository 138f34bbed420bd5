from setuptools import setup, find_packages

setup(
    name="countersync",
    version="0.1.0",
    description="Interactive explorer for AWS AppSync GraphQL endpoints discovered on web pages.",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    package_data={
        "countersync": ["introspection/*.graphql"]
    },
    install_requires=[
        "requests",
        "botocore",
        "graphql-core>=3.2",
        "rich>=12.0",
        "rich-click",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    entry_points={
        "console_scripts": [
            "countersync = countersync.cli:main"
        ]
    },
)
