"""
Document Domain Model

Defines document related Data Transfer Objects (DTOs).
"""

from pydantic import BaseModel, Field


class Document(BaseModel):
    """Stored Document"""

    key: str = Field(..., description="Document Key")
    data: str = Field(..., description="Document Content")


class DocumentCreateResponse(BaseModel):
    """Document Creation Response"""

    key: str = Field(..., description="Generated Document Key")


class MessageResponse(BaseModel):
    """Error Response"""

    message: str = Field(..., description="Human readable message")
