from ..domain.errors import ConfigurationError, PersistenceError
from ..domain.repositories import CountryRepository
from ..domain.results import Err, Ok, Result


async def check_connection(country_repo: CountryRepository) -> Result[bool]:
    try:
        await country_repo.ping()
    except (ConfigurationError, PersistenceError) as exc:
        return Err(exc)
    return Ok(True)
