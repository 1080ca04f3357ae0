"""
Public cloud project record
"""

from dataclasses import dataclass
from typing import Any, Dict, List

from .utils import require_object, require_str


@dataclass
class Project:
    """A public cloud project. Uses snake_case field names on the wire."""
    project_id: str
    description: str

    TABLE_HEADERS = ('PROJECT_ID', 'DESCRIPTION')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Project':
        data = require_object(data)
        return cls(
            project_id=require_str(data, 'project_id'),
            description=require_str(data, 'description'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {'project_id': self.project_id, 'description': self.description}

    def table_row(self) -> List[str]:
        return [self.project_id, self.description]
