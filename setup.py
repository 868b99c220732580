"""
Setup configuration for the swerve-sysid library.

Pure Python on top of robotpy and phoenix6.
It can be installed via:
    - pip install .
    - pip install -e .  (for development)
"""

from setuptools import setup, find_packages

package_name = 'swerve_sysid'

setup(
    name=package_name,
    version='1.0.0',
    packages=find_packages(exclude=['test', 'tests']),

    install_requires=[
        'setuptools',
        'wpilib>=2025.1.1',
        'robotpy-commands-v2>=2025.0.0',
        'phoenix6>=25.0.0',
    ],

    extras_require={
        'dev': [
            'pytest>=7.0',
            'pytest-cov',
            'pytest-timeout',
        ],
    },

    zip_safe=True,

    description='SysId characterization routines for phoenix6 swerve drivetrains',
    long_description=open('README.md').read() if __import__('os').path.exists('README.md') else '',
    long_description_content_type='text/markdown',
    license='MIT',

    tests_require=['pytest'],

    # CLI tools
    entry_points={
        'console_scripts': [
            'swerve-sysid-dryrun = swerve_sysid.dryrun:run_dryrun_cli',
        ],
    },

    python_requires='>=3.9',

    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Topic :: Scientific/Engineering :: Robotics',
    ],
)
