from setuptools import find_packages, setup

DESCRIPTION = 'Coordinate-addressed grids of managed elements, ' \
              'with sliceable N-dimensional ranges and iterators.'

with open('README.md') as f:
    LONG_DESCRIPTION = f.read()

dependencies = [
    'numpy>=1.25',
    'donfig>=0.8',
]

setup(
    name='coordmap',
    version='0.1.0',
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    setup_requires=[
        'setuptools>=61',
    ],
    extras_require={
        'test': [
            'pytest',
            'hypothesis',
        ],
    },
    python_requires='>=3.11, <4',
    install_requires=dependencies,
    package_dir={'': 'src'},
    packages=find_packages('src'),
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Intended Audience :: Developers',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: MIT License',
        'Programming Language :: Python',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Operating System :: Unix',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
    ],
    license='MIT',
)
