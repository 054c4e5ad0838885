from typing import Tuple

RGBTuple = Tuple[int, int, int]
RGBATuple = Tuple[int, int, int, int]
HexColor = str
# Keeps IDW weights finite when a query lands exactly on a point.
EPSILON = 0.01
