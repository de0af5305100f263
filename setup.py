"""
Packaging script for PyPI.
"""
import setuptools
from pathlib import Path

try:
	from boozetools.macroparse.runtime import make_tables
except ImportError:
	pass
else:
	make_tables(Path(__file__).parent / "uniontypes" / "UnionTypes.md")

setuptools.setup(
	name='php-union-types',
	version='0.1.0',
	packages=['uniontypes'],
	package_data={
		'uniontypes': ["UnionTypes.md", "UnionTypes.automaton"],
	},
	entry_points={
		'console_scripts': ["uniontypes = uniontypes.cmdline:main"],
	},
	license='MIT',
	description='Union types with PHP semantics: parsing, subtyping, override variance, and weak-mode coercion',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Compilers",
		"Environment :: Console",
    ],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
