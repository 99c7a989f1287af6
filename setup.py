from setuptools import setup, find_packages

readme_file = 'README'
version = __import__('mhboost').get_version()

setup(name='mhboost',
      version = version,
      description='Multiclass boosting (AdaBoost.MH) with decision stump and perceptron weak learners.',
      long_description=open(readme_file).read(),
      zip_safe=False,
      license = "BSD-3-Clause",
      packages = find_packages(exclude = ['tests', 'tests.*']),
      package_data = {'mhboost': ['demo/*.cfg']},
      python_requires = '>=3.8',
      install_requires = [
        'numpy',
        'numexpr',
        'h5py',
        'ujson',
      ],
      extras_require = {
        'test': ['pytest'],
      },
      entry_points = {
        'console_scripts': ['mhboost = mhboost.run:main'],
      },
      classifiers=['Development Status :: 4 - Beta',
                   'Environment :: Console',
                   'Intended Audience :: Science/Research',
                   'Natural Language :: English',
                   'Operating System :: OS Independent',
                   'Programming Language :: Python :: 3',
                   'Topic :: Scientific/Engineering :: Artificial Intelligence',
                   ],
      )
