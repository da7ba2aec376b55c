#!/usr/bin/env python
from setuptools import setup
import os


def get_version():
    curdir = os.path.dirname(__file__)
    filename = os.path.join(curdir, 'src', 'svgfontembed', 'version.py')
    with open(filename, 'rb') as fp:
        return fp.read().decode('utf8').split('=')[1].strip(" \n'")


def readme():
    with open('README.rst') as f:
        return f.read()


setup(
    name='svgfontembed',
    version=get_version(),
    description='Embed fonts referenced by an SVG file as Base64 data URIs',
    long_description=readme(),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Topic :: Multimedia :: Graphics',
        'Topic :: Multimedia :: Graphics :: Graphics Conversion',
        'Topic :: Text Processing :: Fonts',
    ],
    keywords='svg font embed font-face base64',
    license='MIT License',
    package_dir={'': 'src'},
    packages=[
        'svgfontembed',
        'svgfontembed.core',
    ],
    python_requires='>=3.10',
    install_requires=[],
    extras_require={
        'test': [
            'pytest'],
    },
    include_package_data=True,
    entry_points={
        'console_scripts': ['svgfontembed=svgfontembed.__main__:main']
    },
    )
