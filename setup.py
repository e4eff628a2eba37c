"""
See COPYRIGHT.md for copyright information.

  pip install -e .            (lxml regex aiohttp aiofiles)
  pip install -e .[test]      (adds pytest)

"""
import os

from setuptools import find_packages, setup


def get_version():
    """
    Retrieving version string from git tag using GitHub Actions environment variables.
    Returns 0.0.0 if no tag included.
    """
    github_ref_type = os.getenv('GITHUB_REF_TYPE')
    github_ref_name = os.getenv('GITHUB_REF_NAME')
    return github_ref_name if github_ref_type == 'tag' else '0.0.0'


setup(
    name='esrsoutline',
    version=get_version(),
    description='Loads the ESRS XBRL taxonomy and reconstructs its labeled disclosure outline',
    python_requires='>=3.9',
    packages=find_packages('.', include=['esrsoutline', 'esrsoutline.*']),
    package_data={
        'esrsoutline': ['config/*.json'],
    },
    include_package_data=True,
    install_requires=[
        'lxml',
        'regex',
        'aiohttp',
        'aiofiles',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
)
