"""
Diagnostics reported by the generator, the linter and the CLI.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class Diagnostic:
    """Represents an error or warning about a catalog or a block"""
    type: str
    message: str
    source: str  # catalog path or block type
    block_id: Optional[str] = None
    severity: str = 'error'
    suggestion: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON output"""
        return {
            'type': self.type,
            'message': self.message,
            'source': self.source,
            'block_id': self.block_id,
            'severity': self.severity,
            'suggestion': self.suggestion
        }

    def format(self) -> str:
        where = f"{self.source}[{self.block_id}]" if self.block_id else self.source
        return f"{where}: {self.severity.upper()}: {self.message}"
