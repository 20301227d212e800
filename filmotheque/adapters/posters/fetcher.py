"""
Client de telechargement des affiches distantes.

Implemente IImageFetcher avec httpx. Les redirections sont suivies
manuellement pour pouvoir borner la chaine (MAX_REDIRECTS) et remonter
une NetworkError explicite en cas de boucle.

Usage:
    fetcher = HttpxImageFetcher(timeout=30.0)
    data = await fetcher.fetch("https://image.tmdb.org/t/p/w500/poster.jpg")
    await fetcher.close()
"""

from typing import Optional

import httpx
from loguru import logger

from filmotheque.core.exceptions import NetworkError
from filmotheque.core.ports.posters import IImageFetcher

_SUPPORTED_SCHEMES = frozenset({"http", "https"})


class HttpxImageFetcher(IImageFetcher):
    """
    Telechargeur d'images base sur httpx.AsyncClient.

    - Transport http ou https choisi par le schema de l'URL
    - Redirections 3xx avec Location suivies jusqu'a max_redirects
    - Toute autre reponse non-2xx leve NetworkError avec le code HTTP
    - Timeout par requete (30s par defaut)

    Attributes:
        MAX_REDIRECTS: Nombre maximum de redirections suivies par defaut
        DEFAULT_TIMEOUT: Timeout par defaut en secondes
    """

    MAX_REDIRECTS = 10
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        max_redirects: int = MAX_REDIRECTS,
        user_agent: Optional[str] = None,
    ) -> None:
        """
        Initialise le telechargeur.

        Args:
            timeout: Timeout de chaque requete en secondes
            max_redirects: Nombre maximum de redirections suivies
            user_agent: En-tete User-Agent optionnel
        """
        self._timeout = timeout
        self._max_redirects = max_redirects
        self._user_agent = user_agent
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "image/*"}
            if self._user_agent:
                headers["User-Agent"] = self._user_agent
            self._client = httpx.AsyncClient(
                headers=headers,
                timeout=self._timeout,
                follow_redirects=False,
            )
        return self._client

    @staticmethod
    def _check_url(url: str) -> None:
        """Refuse les URLs invalides ou dont le schema n'est pas http(s)."""
        try:
            scheme = httpx.URL(url).scheme
        except httpx.InvalidURL as e:
            raise NetworkError(url, f"URL invalide: {url}") from e
        if scheme not in _SUPPORTED_SCHEMES:
            raise NetworkError(url, f"Schema non supporte: {scheme or '(aucun)'}")

    async def fetch(self, url: str) -> bytes:
        """
        Telecharge une image en suivant les redirections.

        Args:
            url: URL http ou https de l'image

        Returns:
            Octets du corps de la reponse finale

        Raises:
            NetworkError: Erreur de transport, statut non-2xx,
                          redirection sans Location ou chaine trop longue
        """
        client = self._get_client()
        current_url = url
        redirects = 0

        while True:
            self._check_url(current_url)
            try:
                response = await client.get(current_url)
            except httpx.HTTPError as e:
                logger.warning(f"Erreur reseau pour {current_url}: {e}")
                raise NetworkError(
                    current_url, f"Echec de connexion: {current_url} ({e})"
                ) from e

            if response.is_redirect:
                if redirects >= self._max_redirects:
                    logger.warning(
                        f"Trop de redirections depuis {url} (max {self._max_redirects})"
                    )
                    raise NetworkError(
                        url,
                        f"Trop de redirections (max {self._max_redirects})",
                        status_code=response.status_code,
                    )
                redirects += 1
                location = response.headers["Location"]
                current_url = str(httpx.URL(current_url).join(location))
                logger.debug(f"Redirection {redirects} vers {current_url}")
                continue

            if not response.is_success:
                logger.warning(
                    f"Statut HTTP {response.status_code} pour {current_url}"
                )
                raise NetworkError(
                    current_url,
                    f"Echec du telechargement de l'image: {response.status_code}",
                    status_code=response.status_code,
                )

            logger.debug(
                f"Telecharge {len(response.content)} octets depuis {current_url}"
            )
            return response.content

    async def close(self) -> None:
        """Ferme le client HTTP s'il a ete cree."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
