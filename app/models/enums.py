# app/models/enums.py

import enum


class SectionType(str, enum.Enum):
    text = "text"
    html = "html"
    code = "code"
    image = "image"
    video = "video"
