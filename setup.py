# -*- coding: utf-8 -*-

from setuptools import setup


setup(
    name='funcjson',
    version='0.1.0',
    packages=['funcjson'],
    python_requires='>=3.7',
    author='Andrey Vlasovskikh',
    author_email='andrey.vlasovskikh@gmail.com',
    description='A JSON parser and path accessor built from functional '
        'parsing combinators',
    license='MIT',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
    ],
)
