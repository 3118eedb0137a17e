# fpextract

Fingerprint image processing on greyscale images held as NumPy arrays.

The extraction pipeline splits an image into 16-pixel blocks, builds a grey
level histogram per block, computes a segmentation mask of the fingerprint
area, equalizes contrast, estimates ridge orientation per block, smooths along
and across the ridges, binarizes, and thins the ridges down to a one-pixel
skeleton. Minutiae (ridge endings and bifurcations) and the ridges between
them can then be found on that skeleton.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Usage as a library

Images are two-dimensional arrays of grey levels 0..255, indexed as
`image[x, y]`.

```python
import numpy as np
from fpextract.extract import extract
from fpextract.minutiae import find_minutiae
from fpextract.model import remove_dots

image = np.zeros((64, 64), dtype=np.uint8)   # your greyscale fingerprint
result = extract(image)

for stage, seconds in result.timings.durations().items():
    print(f"{stage}: {seconds:.6f}s")

binarized = result.binarized   # boolean ridge image
skeleton = result.thinned      # boolean one-pixel skeleton
for minutia in remove_dots(find_minutiae(skeleton)):
    print(minutia.minutia_type.name, minutia.position, len(minutia.ridges))
```

`extract` returns an `ExtractionResult` with `binarized`, `thinned` and
`timings`. `Timings` holds the clock reading at the start of each stage;
`Timings.durations()` turns them into seconds per stage plus a total.

`find_minutiae` returns a list of `Minutia` objects, each with its
`MinutiaType` (`RIDGE_END` or `BIFURCATION`), its `position` and the `Ridge`
objects traced from it. A `Ridge` has `points`, `start`, `end` and a
`reversed` twin; assigning `start` or `end` keeps the minutiae's ridge lists
and the twin consistent. `find_minutiae` raises `ValueError` when a ridge runs
through a pixel that does not have exactly two set neighbours, so it expects a
clean skeleton.

The stages can be used on their own:

- `fpextract.local_histogram`: `BlockMap`, `analyze`, `smooth_around_corners`
- `fpextract.contrast`: `ClippedContrast`, `RelativeContrast`, `detect_low_absolute_contrast`
- `fpextract.voting_filter`: `VotingFilter`
- `fpextract.segmentation`: `SegmentationMask`
- `fpextract.equalizer`: `Equalizer`
- `fpextract.hill_orientation`: `detect_orientation`, `block_mask_to_pixel_mask`
- `fpextract.lines_by_orientation`: `construct_lines`
- `fpextract.oriented_smoother`: `SmootherConfig`, `smooth`
- `fpextract.binarizer`: `binarize`
- `fpextract.thinner`: `Thinner` (the outermost rows and columns are ignored)
- `fpextract.inner_mask`: `InnerMask`
- `fpextract.extract`: `extract`, `invert_image`, `ExtractionResult`, `Timings`
- `fpextract.minutiae`: `find_minutiae`
- `fpextract.model`: `Minutia`, `MinutiaType`, `Ridge`, `SkeletonBuilder`, `remove_dots`

Invalid input (wrong shapes, pixel values outside 0..255, negative filter
parameters) raises `ValueError`.

## Command line

```
fpextract image.pgm [more.pgm ...]
```

Each file must be a PGM image (binary `P5` or text `P2`, at most 8 bits per
pixel). For each one the command prints the time spent in each stage and
writes the binarized and thinned images as PGM files next to the input: the
last four characters of the name are replaced by `.binarized.pgm` and
`.thinned.pgm`. Files that cannot be read are reported on standard error and
skipped. With no arguments it tries
`../TestImages/Person1/Bas1440999265-Hamster-0-1.png.pgm`.

## What it does not do

- The `extract` pipeline stops at the thinned skeleton; it does not run
  minutiae detection. Its "Minutiae detection" and "Minutiae filtering"
  timings are therefore close to zero. Call `find_minutiae` yourself.
- The only minutiae filter is `remove_dots`, which drops minutiae without
  ridges.
- There is no fingerprint matching, and no saving or loading of templates or
  minutiae.
- The command line reads and writes PGM only.