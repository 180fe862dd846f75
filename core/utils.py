import hashlib
import logging

from core.matcher.models import MatchPerspective, ProfileId

logger = logging.getLogger(__name__)


class PairFingerprinter:
    """
    Pure logic for creating deterministic cache keys for scored pairs.
    """

    @staticmethod
    def calculate(
        job_id: ProfileId,
        candidate_id: ProfileId,
        perspective: MatchPerspective = MatchPerspective.EMPLOYER
    ) -> str:
        """
        Create a deterministic hash of the pair and the ranking perspective.
        Formula: SHA256(job_id + candidate_id + perspective)
        """
        raw_string = f"{str(job_id).strip()}|{str(candidate_id).strip()}|{perspective.value}"
        return hashlib.sha256(raw_string.encode('utf-8')).hexdigest()
