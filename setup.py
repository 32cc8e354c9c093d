from setuptools import setup

setup(
    name='arraymap',
    version='1.0.0',
    packages=['arraymap'],
    # # Uncomment to enable PEP-561 style type hinting and .pyi type hinting files.
    # package_data={
    #     # Conform to PEP-561
    #     'arraymap': ['py.typed']
    # },
    python_requires='>=3.8',
    extras_require={
        'test': ['pytest'],
    },
    license='MIT',
    author='arraymap developers',
    author_email='',
    description='Ordered containers with array-like list and map semantics and optional element type enforcement.'
)
