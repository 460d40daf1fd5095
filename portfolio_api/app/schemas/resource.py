"""
Pydantic schemas for the content resources.

Every kind (blog, about, project) is a flat document of optional
string fields.  Presence is not validated: any subset of the fields may
be sent, on create as well as on update.  Unknown keys are ignored.
The same model serves both operations; on update only the keys the
client actually sent are written (``model_dump(exclude_unset=True)``).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class ResourceFields(BaseModel):
    model_config = ConfigDict(extra="ignore")


class BlogFields(ResourceFields):
    image: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None


class AboutFields(ResourceFields):
    image: Optional[str] = None
    occupation: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class ProjectFields(ResourceFields):
    image: Optional[str] = None
    title: Optional[str] = None
    subTitle: Optional[str] = None
    description: Optional[str] = None
    gitLink: Optional[str] = None
    demoLink: Optional[str] = None
