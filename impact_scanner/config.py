"""Configuration for the Cloud Impact Scanner.

Includes configuration for:
- Boavizta impact backend (BoaviztaConfig with BOAVIZTA_ prefix)
- Scan defaults such as usage duration (ScanConfig with SCAN_ prefix)
- AWS access for inventories stored in S3 (AWSConfig with AWS_ prefix)
- HTTP API server (ApiServerConfig with API_ prefix)
- CloudWatch metrics (MetricsConfig with METRICS_ prefix)

Configuration can be overridden via:
1. Environment variables (e.g., SCAN_USAGE_DURATION_HOURS=24,
   BOAVIZTA_API_URL=http://localhost:5000)
2. .env file in the current directory
3. Default values in code
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BoaviztaConfig(BaseSettings):
    """Configuration for the Boavizta impact API.

    Can be overridden via environment variables with BOAVIZTA_ prefix:
    - BOAVIZTA_API_URL
    - BOAVIZTA_TIMEOUT_SECONDS
    - BOAVIZTA_MAX_CONCURRENT_REQUESTS
    - BOAVIZTA_DEFAULT_CPU_LOAD_PERCENT

    Attributes:
        api_url: Base URL of the Boavizta API
        timeout_seconds: Timeout applied to each HTTP request
        max_concurrent_requests: Upper bound on in-flight requests per estimation
        default_cpu_load_percent: CPU load assumed for instances without usage data
    """

    model_config = SettingsConfigDict(
        env_prefix="BOAVIZTA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_url: str = Field(
        default="https://api.boavizta.org", description="Base URL of the Boavizta API"
    )
    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout (s)")
    max_concurrent_requests: int = Field(
        default=10, ge=1, le=100, description="Maximum concurrent requests to the API"
    )
    default_cpu_load_percent: float = Field(
        default=50.0,
        ge=0,
        le=100,
        description="CPU load used when an instance has no usage data (%)",
    )

    @field_validator("api_url")
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        if not v or not v.strip():
            msg = "Boavizta API URL cannot be empty"
            raise ValueError(msg)
        return v.rstrip("/")


class ScanConfig(BaseSettings):
    """Defaults applied to each impact estimation.

    Can be overridden via environment variables with SCAN_ prefix:
    - SCAN_USAGE_DURATION_HOURS
    - SCAN_VERBOSE
    - SCAN_PROVIDER_TIMEOUT_SECONDS

    Attributes:
        usage_duration_hours: Duration impacts are projected over
        verbose: Keep backend raw data on each impact value
        provider_timeout_seconds: Overall limit for one provider call (None disables)
    """

    model_config = SettingsConfigDict(
        env_prefix="SCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    usage_duration_hours: float = Field(
        default=1.0, gt=0, description="Usage duration impacts are estimated for (hours)"
    )
    verbose: bool = Field(default=False, description="Include backend raw data in results")
    provider_timeout_seconds: float | None = Field(
        default=300.0, gt=0, description="Overall timeout for a provider call (seconds)"
    )


class AWSConfig(BaseSettings):
    """AWS configuration used when loading inventories from S3."""

    model_config = SettingsConfigDict(
        env_prefix="AWS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    region: str = Field(default="eu-west-3")

    # Optional endpoint URL for LocalStack (local development)
    endpoint_url: str | None = Field(
        default=None, description="Override AWS endpoint for LocalStack"
    )


class ApiServerConfig(BaseSettings):
    """Configuration for the HTTP API server.

    Can be overridden via environment variables with API_ prefix:
    - API_HOST (default: 0.0.0.0)
    - API_PORT (default: 8085)
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Interface the API server binds to")
    port: int = Field(default=8085, ge=1, le=65535, description="Port for the API server")


class MetricsConfig(BaseSettings):
    """CloudWatch EMF metrics toggle (METRICS_ENABLED)."""

    model_config = SettingsConfigDict(
        env_prefix="METRICS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    enabled: bool = Field(default=False, description="Emit CloudWatch EMF metrics")
