from enum import Enum
import numpy as np


class FormatType(str, Enum):
    INT = "int"
    FLOAT = "float"


class RenderQuality(str, Enum):
    PREVIEW = "preview"
    FULL = "full"


max_channel = {
    FormatType.INT: 255,
    FormatType.FLOAT: 1.0,
}

default_format_dtypes = {
    FormatType.INT: np.uint8,
    FormatType.FLOAT: np.float32,
}
