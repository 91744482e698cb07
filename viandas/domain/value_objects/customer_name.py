"""
Customer Name value object
"""

from dataclasses import dataclass

from viandas.domain.business_rules import ValidationLimits



@dataclass(frozen=True)
class CustomerName:
    """Customer name value object with validation"""

    value: str

    def __post_init__(self):
        """Validate customer name"""
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("Customer name cannot be empty")

        cleaned_name = " ".join(self.value.split())

        if len(cleaned_name) > ValidationLimits.MAX_NAME_LENGTH:
            raise ValueError(
                f"Customer name cannot exceed {ValidationLimits.MAX_NAME_LENGTH} characters"
            )

        # Use object.__setattr__ because the class is frozen
        object.__setattr__(self, "value", cleaned_name)

    def __str__(self) -> str:
        return self.value
