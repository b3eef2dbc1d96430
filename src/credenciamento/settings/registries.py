"""External registry settings (SAS, CPE and the 4Events ticketing platform)."""

from decouple import config

REGISTRY_TIMEOUT_SECONDS = config("REGISTRY_TIMEOUT_SECONDS", default=15.0, cast=float)

# SAS - Sistema de Atendimento do Sebrae
SAS_BASE_URL = config("SAS_BASE_URL", default="https://sas.sebrae.com.br/SasServiceDisponibilizacoes")
SAS_PERSON_URL = config("SAS_PERSON_URL", default="https://sas.sebrae.com.br/SasServiceCliente/Cliente")
SAS_API_KEY = config("SAS_API_KEY", default="")
SAS_COD_UF = config("SAS_COD_UF", default="24")

# CPE - Cadastro de Pessoas e Empresas (OAuth2 client credentials)
CPE_AUTH_URL = config(
    "CPE_AUTH_URL", default="https://amei.sebrae.com.br/auth/realms/externo/protocol/openid-connect/token"
)
CPE_BASE_URL = config("CPE_BASE_URL", default="https://api-gateway.sebrae.com.br/cpe/v1")
CPE_CLIENT_ID = config("CPE_CLIENT_ID", default="")
CPE_CLIENT_SECRET = config("CPE_CLIENT_SECRET", default="")
CPE_TOKEN_DEFAULT_TTL = config("CPE_TOKEN_DEFAULT_TTL", default=1800, cast=int)

# 4Events ticketing platform
FOUR_EVENTS_BASE_URL = config("FOUR_EVENTS_BASE_URL", default="https://api.4.events")
FOUR_EVENTS_TOKEN = config("FOUR_EVENTS_TOKEN", default="")

# Where attendants are sent when a CPF is not found anywhere
LOOKUP_FALLBACK_URL = config("LOOKUP_FALLBACK_URL", default="")

WORKFLOW_WEBHOOK_SECRET = config("WORKFLOW_WEBHOOK_SECRET", default="")
