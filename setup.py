"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='variety-lang',
	version='0.1.0',
	packages=['variety'],
	entry_points={
		'console_scripts': ["variety = variety.cmdline:main"],
	},
	license='MIT',
	description='Algebraic datatypes with lazy variants, and a pattern compiler that forces only what the rules inspect',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Compilers",
		"Topic :: Software Development :: Libraries",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
