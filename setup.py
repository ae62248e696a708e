from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as f:
    readme = f.read()

setup(
    name="osmpbf",
    license="GPL v3",
    version="1.0.0",
    description="Streaming reader of OpenStreetMap PBF files",
    long_description=readme,
    long_description_content_type="text/markdown",
    author="Mikolaj Kuranowski",
    url="https://github.com/MKuranowski/osmpbf",
    keywords="osm openstreetmap pbf protobuf",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: GNU General Public License v3 or later (GPLv3+)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Scientific/Engineering :: GIS",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    packages=find_packages(include=["osmpbf", "osmpbf.*"]),
    package_data={"osmpbf.pbf": ["*.proto", "*.pyi"]},
    python_requires=">=3.8, <4",
    install_requires=["protobuf>=3.20", "typing_extensions"],
    extras_require={"docs": ["sphinx", "furo"]},
    data_files=["README.md"],
)
