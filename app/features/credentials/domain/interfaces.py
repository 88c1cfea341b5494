from abc import ABC, abstractmethod

from .models import StagedCredential


class ICredentialStager(ABC):
    """
    Contract for turning caller-supplied cookie material into something
    the external tool can read.
    """

    @abstractmethod
    def stage(self, cookies_b64: str) -> StagedCredential:
        """
        Decodes a base64 Netscape cookie jar and writes it to a private file.

        Raises:
            ValidationError: If the payload is not valid base64.
        """
        pass
