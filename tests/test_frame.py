import numpy as np
import pytest
from PIL import Image

from valuemap.frame import PixelBuffer


def test_from_bytes():
    buf = PixelBuffer(data=bytes(range(16)), width=2, height=2)
    arr = buf.as_array()
    assert arr.shape == (2, 2, 4)
    assert arr[1, 0].tolist() == [8, 9, 10, 11]


def test_as_array_is_read_only():
    buf = PixelBuffer(data=bytearray(16), width=2, height=2)
    with pytest.raises(ValueError):
        buf.as_array()[0, 0, 0] = 1


def test_length_mismatch():
    with pytest.raises(ValueError, match="Expected 24 bytes"):
        PixelBuffer(data=bytes(16), width=3, height=2)


def test_negative_size():
    with pytest.raises(ValueError, match="Negative frame size"):
        PixelBuffer(data=b"", width=-1, height=0)


def test_is_ready():
    assert PixelBuffer(data=bytes(4), width=1, height=1).is_ready
    assert not PixelBuffer(data=b"", width=0, height=5).is_ready


def test_from_image_converts_to_rgba():
    img = Image.new("RGB", (3, 2), (10, 20, 30))
    buf = PixelBuffer.from_image(img)
    assert (buf.width, buf.height) == (3, 2)
    assert buf.as_array()[0, 0].tolist() == [10, 20, 30, 255]


def test_from_image_greyscale():
    buf = PixelBuffer.from_image(Image.new("L", (4, 4), 77))
    assert buf.as_array()[3, 3].tolist() == [77, 77, 77, 255]


def test_from_array_pads_rgb():
    arr = np.zeros((2, 5, 3), dtype=np.uint8)
    arr[..., 1] = 200
    buf = PixelBuffer.from_array(arr)
    assert (buf.width, buf.height) == (5, 2)
    assert buf.as_array()[1, 4].tolist() == [0, 200, 0, 255]


def test_from_array_rejects_bad_shape():
    with pytest.raises(ValueError, match="Expected an"):
        PixelBuffer.from_array(np.zeros((4, 4), dtype=np.uint8))
