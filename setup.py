import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

packages = setuptools.find_packages(exclude=["tests.*", "tests", "eval.*", "eval"])
tests_require = [
    'pytest>=6.2.3'
]
setuptools.setup(
    name="deadswitch",
    version="0.0.1",
    description="Dead-man's-switch escrow of native currency and tokens, released to consenting beneficiaries.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=packages,
    python_requires='>=3.10',
    install_requires=[
        'appdirs>=1.4.4,<2',
        'enforce-typing>=1.0.0,<2'
    ],
    tests_require=tests_require,
    extras_require={
        'test': tests_require
    }
)
