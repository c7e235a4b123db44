# setup.py
from setuptools import setup, find_packages

setup(
    name="chronolens",
    version="0.1.0",
    packages=find_packages(include=['chronolens', 'chronolens.*', 'config', 'api', 'api.*']),
    install_requires=[
        'fastapi>=0.100.0',
        'uvicorn>=0.15.0',
        'python-dotenv>=0.19.0',
        'pydantic>=2.0.0',
        'pydantic-settings>=2.0.0',
        'cachetools>=5.4.0',
        'python-json-logger>=3.1.0',
        'langchain-core>=0.2.0',
        'langchain-google-genai>=1.0.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
            'pytest-asyncio>=0.21.0',
            'httpx>=0.24.0',
        ],
    },
    python_requires='>=3.9',
    package_dir={"": "."},
    include_package_data=True,
)
