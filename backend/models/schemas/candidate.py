"""Candidate-facing document inputs and outputs."""

from pydantic import BaseModel


class CandidateProfile(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""


class ContactBlock(BaseModel):
    name: str = ""
    contact_line: str = ""
    links_line: str = ""


class CoverLetter(BaseModel):
    text: str = ""
    file_name: str = ""


class JobPosting(BaseModel):
    title: str = ""
    company: str = ""
    description: str = ""
