from pydantic import BaseModel

class SiteStats(BaseModel):
    total_documents: int
    total_downloads: int
    total_users: int

class AdminStats(BaseModel):
    pending: int
    approved: int
    rejected: int
    total_users: int
    forum_threads: int
