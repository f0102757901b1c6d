from dataclasses import dataclass
from typing import Optional


@dataclass
class AwsIdentity:
    """
    Quem está chamando a AWS (STS GetCallerIdentity) e com qual profile/região.
    """

    account: str
    arn: str
    user_id: str
    region: Optional[str]
    profile: Optional[str]

    @property
    def profile_label(self) -> str:
        return self.profile or "(no profile / env creds)"

    @property
    def region_label(self) -> str:
        return self.region or "(no default region)"


class AwsIdentityError(RuntimeError):
    pass
