from setuptools import setup

from kpasslite import __version__

if __name__ == '__main__':
    setup(
        name='kpasslite',
        version=__version__,
        description='Read-only terminal viewer for KeePass databases',
        python_requires='>=3.8',
        packages=['kpasslite'],
        install_requires=[
            'colorama',
            'pykeepass>=4.0.3',
        ],
        extras_require={
            'test': ['pytest'],
        },
        entry_points={
            'console_scripts': [
                'kpasslite=kpasslite.__main__:main',
            ],
        },
    )
