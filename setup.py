from setuptools import setup

setup(
    name='jhsiao-resumable',
    version='0.0.1',
    author='Jason Hsiao',
    author_email='oaishnosaj@gmail.com',
    description='Suspend and resume blocking stream readers on incremental input',
    packages=['jhsiao.resumable', 'jhsiao.resumable.formats'],
    python_requires='>=3.7',
    install_requires=['outcome'],
    extras_require={
        'np': ['numpy'],
        'test': ['pytest>=7', 'numpy'],
    },
)
