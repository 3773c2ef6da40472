from abc import ABC, abstractmethod


class NavigatorPort(ABC):
    @abstractmethod
    def go_to_dashboard(self) -> None:
        """Hand control to the parent dashboard once a booking is complete."""
        raise NotImplementedError

    @abstractmethod
    def go_to_marketing_site(self) -> None:
        """Hand control back to the public site after a cancelled booking."""
        raise NotImplementedError
