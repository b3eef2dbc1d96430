import structlog
from django.db.models import Q
from ninja.errors import HttpError

from common.documents import normalize_cnpj
from common.utils import get_or_create_with_race_protection, sanitize_text
from events.models import Company
from events.schema import CompanyEditSchema
from registries.cpe import CPEClient
from registries.schema import CompanyData

logger = structlog.get_logger(__name__)


def upsert_company(data: CompanyEditSchema | CompanyData) -> Company | None:
    """Find a company by CNPJ (else by name) or create it.

    Existing companies keep their data, only blank fields are filled in.
    Returns ``None`` when there is neither a CNPJ nor a name to go by.
    """
    cnpj = normalize_cnpj(data.cnpj) if data.cnpj else None
    razao_social = sanitize_text(data.razao_social or data.nome_fantasia or "")
    if not cnpj and not razao_social:
        return None

    defaults = {
        "cnpj": cnpj,
        "razao_social": razao_social or cnpj,
        "nome_fantasia": sanitize_text(data.nome_fantasia or ""),
    }
    if isinstance(data, CompanyEditSchema):
        defaults |= {
            "telefone": sanitize_text(data.telefone),
            "email": sanitize_text(data.email),
            "endereco": sanitize_text(data.endereco),
        }

    if cnpj:
        company, created = get_or_create_with_race_protection(Company, Q(cnpj=cnpj), defaults)
    else:
        company = Company.objects.matching_name(razao_social).first()
        created = company is None
        if company is None:
            company = Company.objects.create(**defaults)

    if not created:
        changed = [field for field, value in defaults.items() if value and not getattr(company, field)]
        for field in changed:
            setattr(company, field, defaults[field])
        if changed:
            company.save(update_fields=[*changed, "updated_at"])
    else:
        logger.info("company_created", company_id=str(company.id), cnpj=cnpj)
    return company


def resolve_company(company_id: object | None, data: CompanyEditSchema | None) -> Company | None:
    """Company chosen by id, else built from the submitted data.

    Raises:
        HttpError: the id does not match an active company.
    """
    if company_id:
        company = Company.objects.active().filter(pk=company_id).first()
        if company is None:
            raise HttpError(400, "Empresa não encontrada.")
        return company
    if data:
        return upsert_company(data)
    return None


def search_company(cnpj: str) -> CompanyData:
    """Look a CNPJ up in CPE.

    Raises:
        RegistryNotFound: CPE does not know the company.
    """
    with CPEClient() as cpe:
        return cpe.find_company(cnpj)
