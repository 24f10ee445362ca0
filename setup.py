"""Install the interface core service."""

from setuptools import setup, find_packages

setup(
    name='interface-core',
    version='1.0.0',
    packages=find_packages(include=['interface_core', 'interface_core.*'],
                           exclude=['*tests*']),
    py_modules=['create_account', 'generate_token'],
    package_data={'interface_core': ['config.py']},
    install_requires=[
        "flask>=3.1",
        "werkzeug",
        "sqlalchemy>=2.0",
        "flask-sqlalchemy",
        "pyjwt",
        "bcrypt",
        "google-cloud-storage",
        "flask-limiter",
        "flask-cors",
        "python-json-logger",
        "click"
    ],
    extras_require={
        'test': ['pytest']
    },
    zip_safe=False
)
