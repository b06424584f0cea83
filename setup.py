import setuptools
import os

def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    try:
        with open(readme_path, encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        return "scalargraph: scalar computation graphs you can print." # Fallback description

REQUIRED_PKGS = [
    "numpy",
]

EXTRAS_REQUIRED_PKGS = {
    "viz": ["graphviz"],
    "test": ["pytest", "graphviz"],
}

EXTRAS_REQUIRED_PKGS["all"] = list(set(sum(EXTRAS_REQUIRED_PKGS.values(), [])))

setuptools.setup(
    name="scalargraph",
    version="0.1.0-dev",
    author="tomiock",
    author_email="ockier@gmail.com",
    description="Scalar computation graph builder with a text tree renderer",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(
        where=".", include=("scalargraph*",)
    ),
    install_requires=REQUIRED_PKGS,
    extras_require=EXTRAS_REQUIRED_PKGS,
    python_requires=">=3.11",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Intended Audience :: Education",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
)
