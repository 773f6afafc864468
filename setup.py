from setuptools import setup, find_packages

setup(
    name='opencli',
    version='0.1.0',
    packages=find_packages(exclude=['*.tests', '*.tests.*']),
    include_package_data=True,
    install_requires=[
        'typer[all]',
        'kubernetes',
        'urllib3',
        'python-dotenv',
        'PyYAML',
    ],
    extras_require={
        'test': [
            'pytest',
            'jsonschema',
        ],
    },
    entry_points={
        'console_scripts': [
            'opencli=opencli.cli:app'
        ]
    },
    author='The OpenCli Authors',
    description='A CLI for inspecting database clusters running on Kubernetes',
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.8',
)
