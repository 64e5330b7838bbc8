import setuptools

if __name__ == "__main__":
    setuptools.setup(
        name="blindtrack",
        version="1.0.0",
        description="Driver blind-spot shadow geometry for a car approaching a road intersection",
        long_description=open("README.md", encoding="utf-8").read(),
        long_description_content_type="text/markdown",
        license="GPL-3.0-only",
        python_requires=">=3.9",
        packages=setuptools.find_packages(where="src"),
        package_dir={"": "src"},
        install_requires=[
            "numpy>=1.24,<3.0",
            "numba>=0.59",
        ],
        extras_require={
            "test": ["pytest>=7"],
        },
        classifiers=[
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3 :: Only",
            "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
            "Operating System :: OS Independent",
        ]
    )
