[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fpextract"
version = "0.1.0"
description = "Fingerprint image processing: segmentation, equalization, ridge orientation, binarization, thinning and minutiae detection"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["fingerprint", "biometrics", "minutiae", "image processing", "ridge", "thinning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Recognition",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fpextract = "fpextract.extract:main"

[tool.hatch.build.targets.wheel]
packages = ["fpextract"]

[tool.pytest.ini_options]
addopts = "-ra"
