import os
import setuptools


with open(os.path.join(
        os.path.dirname(__file__), 'avlmap', '_version.py')) as f:
    for line in f:
        if line.startswith('__version__ ='):
            _, _, version = line.partition('=')
            VERSION = version.strip(" \n'\"")
            break
    else:
        raise RuntimeError(
            'unable to read the version from avlmap/_version.py')


with open(os.path.join(os.path.dirname(__file__), 'README.rst')) as f:
    README = f.read()


setuptools.setup(
    name='avlmap',
    version=VERSION,
    description='Ordered mapping type for Python backed by an AVL tree',
    long_description=README,
    long_description_content_type='text/x-rst',
    python_requires='>=3.8',
    platforms=['macOS', 'POSIX', 'Windows'],
    license='Apache License, Version 2.0',
    classifiers=[
        'License :: OSI Approved :: Apache Software License',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3 :: Only',
        'Operating System :: POSIX',
        'Operating System :: MacOS :: MacOS X',
        'Operating System :: Microsoft :: Windows',
        'Topic :: Software Development :: Libraries',
    ],
    packages=['avlmap'],
    package_data={'avlmap': ['py.typed', '*.pyi']},
    install_requires=[
        'typing-extensions>=4.0',
    ],
    extras_require={
        'test': [
            'flake8~=5.0',
            'pycodestyle~=2.9',
            'mypy>=1.0',
            'pytest>=7.0',
        ],
    },
    zip_safe=False,
)
