from setuptools import setup

setup(
    name='vrrstats',
    packages=[
        'vrrstats',
        'vrrstats.common',
        'vrrstats.event_queue',
        'vrrstats.statistics',
    ],
    version='0.1.0',
    license='apache-2.0',
    description='Present timing statistics for variable refresh rate displays',
    keywords=['display', 'vrr', 'refresh rate', 'statistics'],
    python_requires='>=3.9',
    install_requires=[],
    extras_require={
        'numpy': ['numpy'],
        'pandas': ['pandas', 'numpy'],
        'test': ['pytest', 'pandas', 'numpy'],
    },
    classifiers=[
        'Development Status :: 3 - Alpha',
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
