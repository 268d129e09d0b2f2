#!/usr/bin/env python3

from setuptools import setup
import os

directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="hierview",
        packages=["hierview", "hierview.core"],
        python_requires='>3.10.0',
        version="0.1.0",
        license="MIT",
        description="Collapsible entity hierarchy model with multi-selection",
        author="mirmik",
        author_email="mirmikns@yandex.ru",
        url="https://github.com/mirmik/hierview",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["hierarchy", "tree", "selection", "editor"],
        classifiers=[],
        include_package_data=True,
        install_requires=[
            "numpy",
            "Pillow>=9.1",
        ],
        extras_require={
            "test": ["pytest"],
        },
        zip_safe=False,
    )
