from setuptools import setup, find_packages

setup(
       name="uniprot-query-client",
       version="0.1.0",
       description="UniProt ID mapping and TrEMBL listing API client",
       packages=find_packages(exclude=["tests", "examples"]),
       install_requires=[
           "requests>=2.31.0",
           "pydantic>=2.5.0",
           "click>=8.1.0",
           "tenacity>=8.2.0",
       ],
       extras_require={
           "dev": ["pytest>=7.4.0", "black>=23.0.0", "mypy>=1.7.0"],
       },
       python_requires=">=3.9",
       entry_points={
           "console_scripts": [
               "uniprot-query=uniprot_query.cli:main",
           ],
       },
   )
