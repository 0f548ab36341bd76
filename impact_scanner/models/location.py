"""Mapping of cloud regions to the country where their energy is consumed."""

from pydantic import BaseModel, ConfigDict, Field

# ISO 3166-1 alpha-3 country of each AWS region
AWS_REGION_COUNTRIES: dict[str, str] = {
    "af-south-1": "ZAF",
    "ap-east-1": "HKG",
    "ap-northeast-1": "JPN",
    "ap-northeast-2": "KOR",
    "ap-northeast-3": "JPN",
    "ap-south-1": "IND",
    "ap-south-2": "IND",
    "ap-southeast-1": "SGP",
    "ap-southeast-2": "AUS",
    "ap-southeast-3": "IDN",
    "ap-southeast-4": "AUS",
    "ca-central-1": "CAN",
    "cn-north-1": "CHN",
    "cn-northwest-1": "CHN",
    "eu-central-1": "DEU",
    "eu-central-2": "CHE",
    "eu-north-1": "SWE",
    "eu-south-1": "ITA",
    "eu-south-2": "ESP",
    "eu-west-1": "IRL",
    "eu-west-2": "GBR",
    "eu-west-3": "FRA",
    "il-central-1": "ISR",
    "me-central-1": "ARE",
    "me-south-1": "BHR",
    "sa-east-1": "BRA",
    "us-east-1": "USA",
    "us-east-2": "USA",
    "us-gov-east-1": "USA",
    "us-gov-west-1": "USA",
    "us-west-1": "USA",
    "us-west-2": "USA",
}


class UnsupportedRegionError(ValueError):
    """Raised when a region has no known country mapping."""


class UsageLocation(BaseModel):
    """Where a resource runs: the provider region and its country.

    Attributes:
        aws_region: Region code (e.g. "eu-west-3")
        iso_country_code: ISO 3166-1 alpha-3 country code (e.g. "FRA")
    """

    model_config = ConfigDict(frozen=True)

    aws_region: str = Field(description="Cloud region code")
    iso_country_code: str = Field(
        min_length=3, max_length=3, description="ISO 3166-1 alpha-3 country code"
    )

    @classmethod
    def from_aws_region(cls, aws_region: str) -> "UsageLocation":
        """Build a location from an AWS region code.

        Raises:
            UnsupportedRegionError: If the region is not in AWS_REGION_COUNTRIES
        """
        country = AWS_REGION_COUNTRIES.get(aws_region)
        if country is None:
            msg = f"Unsupported AWS region: {aws_region}"
            raise UnsupportedRegionError(msg)
        return cls(aws_region=aws_region, iso_country_code=country)
