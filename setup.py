import setuptools

with open("README.rst", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="scopelab",
    version="0.1.0",
    author="ScopeLab Developers",
    description="Design space exploration for reflecting telescopes",
    long_description=long_description,
    long_description_content_type="text/x-rst",
    license="BSD-3-Clause",
    package_dir={'': 'src'},
    packages=setuptools.find_packages('src'),
    python_requires=">=3.8",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    keywords=['geometric optics', 'ray tracing', 'telescope design',
              'newtonian', 'cassegrain', 'ritchey-chretien',
              'schmidt-cassegrain', 'spot diagram'],
    install_requires=[
        "numpy>=1.15.0",
        "json_tricks>=3.12.1",
        "pandas>=0.23.4",
        "attrs>=18.1.0",
        ],
    extras_require={
        'test': ["pytest"],
    },
)
