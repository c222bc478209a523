from setuptools import setup, find_packages
from typing import List

HYPEN_E_DOT = '-e .'
def get_requirements(filepath:str)->List[str]:
    '''this function will return the list of requirements from the file'''
    requirements = []
    with open(filepath) as file_obj:
        requirements = file_obj.readlines()
        requirements = [req.replace("\n","") for req in requirements]
        requirements = [req for req in requirements if req and not req.startswith('#')]

        if HYPEN_E_DOT in requirements:
            requirements.remove(HYPEN_E_DOT)

    return requirements


setup(
name='word2vec-skipgram',
version='0.1.0',
description='Skip-gram Word2Vec with negative sampling and hierarchical softmax',
packages=find_packages(),
python_requires='>=3.8',
install_requires=get_requirements('requirements.txt'),
extras_require={'test': ['pytest']},
entry_points={'console_scripts': ['word2vec-sg=word2vec.cli:main']},
)
