import setuptools

import numseq.version

with open("README.md", "r") as readme:
    long_description = readme.read()

setuptools.setup(
    name='numseq',
    version=numseq.version.VERSION,
    description='Print a sequence of numbers, like seq',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages=setuptools.find_packages('.', include=['numseq', 'numseq.*']),
    scripts=['bin/numseq'],
    install_requires=['dill'],
    extras_require={'test': ['pytest']},
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Operating System :: POSIX'
    ],
    python_requires='>=3.7'
)
