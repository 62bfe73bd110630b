from setuptools import setup


if __name__ == "__main__":

    with open("README.rst") as f:
        long_description = f.read()

    setup(
        classifiers=[
            "Environment :: Web Environment",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: MIT License",
            "Operating System :: OS Independent",
            "Programming Language :: Python",
            "Programming Language :: Python :: 3.7",
            "Programming Language :: Python :: 3.8",
            "Programming Language :: Python :: 3.9",
            "Programming Language :: Python :: Implementation :: CPython",
            "Programming Language :: Python :: Implementation :: PyPy",
            "Topic :: Communications :: Email",
            "Topic :: Internet :: WWW/HTTP",
            "Topic :: Software Development :: Libraries :: Python Modules",
        ],
        description="HTTP headers, cookies, cookie jars and MIME bodies",
        long_description=long_description,
        long_description_content_type="text/x-rst",
        python_requires=">=3.7",
        setup_requires=["incremental"],
        use_incremental=True,
        install_requires=[
            "attrs>=21.3.0",  # 21.3.0 introduces the attrs namespace
            "hyperlink",
            "incremental",
            "python-dateutil",
            "Twisted>=16.6",
            "Werkzeug>=2.0",
            "zope.interface",
        ],
        extras_require={
            "test": [
                "hypothesis",
            ]
        },
        keywords="http mime headers cookies multipart",
        license="MIT",
        name="missive",
        packages=["missive", "missive.test"],
        package_dir={"": "src"},
        package_data=dict(
            missive=[],
        ),
        zip_safe=False,
    )
