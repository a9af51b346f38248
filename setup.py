from setuptools import setup, find_packages

setup(
    name="badge-validator",
    version="0.1.0",
    description="Declarative field validation for badge assertions, badges and issuers",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={
        'badge_validator': ['models.yaml', 'models.schema.json'],
    },
    include_package_data=True,
    install_requires=[
        'pyyaml>=6.0',
        'jsonschema>=4.17.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.9',
)
