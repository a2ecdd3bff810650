from setuptools import setup, find_packages

main_ns = {}
with open("src/json_pretty_compact/_version.py") as ver_file:
    exec(ver_file.read(), main_ns)


setup(
    name="json-pretty-compact",
    version=main_ns["__version__"],
    description="A JSON formatter that keeps lists and dicts on one line where they fit",
    license="MIT",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=["wcwidth"],
    extras_require={
        "test": ["pytest", "pytest-console-scripts"],
    },
    entry_points={
        "console_scripts": [
            "json-pretty-compact=json_pretty_compact._json_pretty_compact:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
