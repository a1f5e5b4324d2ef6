from setuptools import setup



setup(name='glenn2vcf',
      version='0.0.1',
      description='Convert per-base calls on a sequence graph to VCF',
      author='Ivar Grytten',
      author_email='',
      license='MIT',
      packages=["glenn2vcf"],
      zip_safe=False,
      install_requires=['numpy', 'sortedcontainers', 'tqdm', 'biopython', 'pathos'],
      extras_require={
            'test': ['pytest']
      },
      classifiers=[
            'Programming Language :: Python :: 3'
      ],
      entry_points={
            'console_scripts': ['glenn2vcf=glenn2vcf.command_line_interface:main']
      },
)


""""
rm -rf dist
python3 setup.py sdist
twine upload --skip-existing dist/*

"""
