"""
School Information Model
Organization metadata used by school-related card fields
"""

from pydantic import BaseModel
from typing import Optional


class SchoolInformation(BaseModel):
    """School name, logo, address and code"""
    school_name: Optional[str] = None
    logo: Optional[str] = None
    address: Optional[str] = None
    school_code: Optional[str] = None

    class Config:
        from_attributes = True
