"""
Service d'orchestration des affiches de films.

Compose le telechargement, l'adressage par contenu, le stockage, la
transformation et le cache en operations publiques :
- ingest_from_url / ingest_from_file : ingestion d'une affiche
- get_by_key : lecture d'une variante stockee
- resize_by_key : redimensionnement a la demande (memorise)
- delete_poster : suppression d'une affiche
- clear_cache : invalidation complete du cache et des redimensionnements

Cycle d'une ingestion :
    Demande -> (cache: retour immediat) -> Telechargement/Lecture
    -> Adressage -> Stockage original -> [Transformation -> Stockage vignette]
    -> Mise en cache -> Termine

Un echec a n'importe quelle etape interrompt l'ingestion et remonte l'erreur
d'origine. Un original deja stocke n'est jamais supprime si la vignette
echoue ensuite : la source est indexee apres le stockage de l'original, et
une nouvelle tentative reprend a partir de l'original sans re-telecharger.
"""

import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from loguru import logger

from filmotheque.adapters.posters.addressing import (
    KEY_EXTENSION,
    address_from_bytes,
    address_from_locator,
)
from filmotheque.adapters.posters.local_reader import read_local_file
from filmotheque.core.exceptions import PosterError, TransformError
from filmotheque.core.ports.posters import (
    IAssetStore,
    IImageFetcher,
    IImageTransformer,
    IResizeCache,
)
from filmotheque.core.value_objects import (
    AssetKey,
    FitPolicy,
    IngestOptions,
    IngestResult,
    ResizeOptions,
    Variant,
)

# Lecteur de fichiers locaux (substituable dans les tests)
LocalReader = Callable[[Path], Awaitable[bytes]]


class PosterService:
    """
    Service de gestion des affiches (telechargement, stockage, redimensionnement, cache).

    Toutes les dependances sont injectees pour pouvoir etre remplacees
    individuellement (ex: un faux fetcher pour eviter le reseau).

    Utilisation:
        service = PosterService(fetcher, transformer, store, cache)
        result = await service.ingest_from_url("https://example.org/poster.jpg")
        thumb = await service.get_by_key(result.key, Variant.THUMBNAIL)
        small = await service.resize_by_key(result.key, ResizeOptions(100, 150))
        await service.close()
    """

    def __init__(
        self,
        fetcher: IImageFetcher,
        transformer: IImageTransformer,
        store: IAssetStore,
        cache: IResizeCache,
        read_file: LocalReader = read_local_file,
    ) -> None:
        """
        Initialise le service d'affiches.

        Args:
            fetcher: Telechargeur d'images distantes
            transformer: Producteur des images derivees
            store: Stockage durable des affiches
            cache: Cache memoire des resultats
            read_file: Lecteur des fichiers locaux
        """
        self._fetcher = fetcher
        self._transformer = transformer
        self._store = store
        self._cache = cache
        self._read_file = read_file
        # Index source -> cle de contenu, rempli des que l'original est stocke
        self._sources: dict[AssetKey, AssetKey] = {}
        # Ingestions en cours, partagees entre demandes concurrentes identiques
        self._in_flight: dict[AssetKey, asyncio.Future] = {}

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    async def ingest_from_url(
        self, url: str, options: Optional[IngestOptions] = None
    ) -> IngestResult:
        """
        Telecharge et stocke une affiche depuis une URL.

        Args:
            url: URL http(s) de l'affiche
            options: Options de vignette (defaut: vignette 200x300)

        Returns:
            IngestResult (cle et presence des variantes)

        Raises:
            NetworkError: Echec du telechargement
            TransformError: Image non decodable (l'original reste stocke)
            AssetIOError: Echec d'ecriture sur le disque
        """
        return await self._ingest(
            cache_key=f"download:{url}",
            locator=url,
            load=lambda: self._fetcher.fetch(url),
            options=options or IngestOptions(),
        )

    async def ingest_from_file(
        self, path: Union[str, Path], options: Optional[IngestOptions] = None
    ) -> IngestResult:
        """
        Stocke une affiche depuis un fichier local.

        Raises:
            NotFoundError: Si le fichier n'existe pas
            TransformError: Image non decodable (l'original reste stocke)
            AssetIOError: Echec de lecture ou d'ecriture
        """
        file_path = Path(path)
        return await self._ingest(
            cache_key=f"store:{file_path}",
            locator=str(file_path),
            load=lambda: self._read_file(file_path),
            options=options or IngestOptions(),
        )

    async def _ingest(
        self,
        cache_key: str,
        locator: str,
        load: Callable[[], Awaitable[bytes]],
        options: IngestOptions,
    ) -> IngestResult:
        """Cache, puis de-duplication des ingestions concurrentes d'une meme source."""
        cached = self._cache.get(cache_key)
        if cached is not None:
            if await self._store.exists(cached.key, Variant.ORIGINAL):
                logger.debug(f"Cache: {cache_key} -> {cached.key}")
                return cached
            self._cache.discard(cache_key)

        source_key = address_from_locator(locator)
        pending = self._in_flight.get(source_key)
        if pending is not None:
            logger.debug(f"Ingestion deja en cours pour {locator}")
            return await asyncio.shield(pending)

        task = asyncio.ensure_future(
            self._run_ingest(cache_key, source_key, locator, load, options)
        )
        self._in_flight[source_key] = task
        try:
            return await asyncio.shield(task)
        finally:
            if self._in_flight.get(source_key) is task:
                del self._in_flight[source_key]

    async def _run_ingest(
        self,
        cache_key: str,
        source_key: AssetKey,
        locator: str,
        load: Callable[[], Awaitable[bytes]],
        options: IngestOptions,
    ) -> IngestResult:
        key: Optional[AssetKey] = None
        try:
            data: Optional[bytes] = None
            known_key = self._sources.get(source_key)
            if known_key is not None and await self._store.exists(known_key, Variant.ORIGINAL):
                # Reprise : l'original est deja stocke, pas de nouveau telechargement
                key = known_key
                logger.debug(f"Original deja stocke pour {locator}: {key}")
            else:
                data = await load()
                if not data:
                    raise TransformError(f"Contenu vide: {locator}")
                key = address_from_bytes(data)
                await self._store.write(key, Variant.ORIGINAL, data)
                self._sources[source_key] = key

            if options.create_thumbnail:
                if data is None:
                    data = await self._store.read(key, Variant.ORIGINAL)
                thumbnail = await self._transformer.transform(
                    data, options.thumbnail_options
                )
                await self._store.write(key, Variant.THUMBNAIL, thumbnail)
        except PosterError as e:
            if isinstance(e, TransformError) and e.key is None:
                e.key = key
            logger.error(f"Echec de l'ingestion de l'affiche {locator}: {e}")
            raise

        result = IngestResult(
            key=key,
            has_original=True,
            has_thumbnail=await self._store.exists(key, Variant.THUMBNAIL),
        )
        self._cache.put(cache_key, key, result)
        logger.info(f"Affiche ingeree: {locator} -> {key}")
        return result

    # ------------------------------------------------------------------
    # Lecture et redimensionnement
    # ------------------------------------------------------------------

    async def get_by_key(
        self, key: AssetKey, variant: Union[Variant, str] = Variant.ORIGINAL
    ) -> bytes:
        """
        Lit une variante stockee.

        Raises:
            NotFoundError: Si la variante est absente
            ValueError: Si la variante est inconnue
        """
        variant = Variant(variant)
        try:
            return await self._store.read(key, variant)
        except PosterError as e:
            logger.warning(f"Lecture de l'affiche {key} ({variant.value}) impossible: {e}")
            raise

    async def get_poster_path(
        self, key: AssetKey, variant: Union[Variant, str] = Variant.ORIGINAL
    ) -> Optional[Path]:
        """Retourne le chemin d'une variante stockee, ou None si absente."""
        variant = Variant(variant)
        if not await self._store.exists(key, variant):
            return None
        return self._store.path_for(key, variant)

    @staticmethod
    def derived_name(key: AssetKey, options: ResizeOptions) -> str:
        """Nom du fichier redimensionne dans cache/ (ex: abc_100x150.jpg)."""
        stem = key.rsplit(".", 1)[0]
        suffix = "_fill" if options.fit is FitPolicy.FILL else ""
        return f"{stem}_{options.width}x{options.height}{suffix}{KEY_EXTENSION}"

    async def resize_by_key(self, key: AssetKey, options: ResizeOptions) -> bytes:
        """
        Redimensionne l'original d'une affiche (resultat memorise).

        Raises:
            NotFoundError: Si l'original est absent
            TransformError: Si l'original n'est pas decodable
            AssetIOError: Echec d'ecriture du fichier redimensionne
        """
        cache_key = f"resize:{key}:{options.width}x{options.height}:{options.fit.value}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            if await self._store.derived_exists(cached):
                logger.debug(f"Cache: {cache_key} -> {cached}")
                return await self._store.read_derived(cached)
            self._cache.discard(cache_key)

        name = self.derived_name(key, options)
        try:
            original = await self._store.read(key, Variant.ORIGINAL)
            data = await self._transformer.transform(original, options)
            await self._store.write_derived(name, data)
        except PosterError as e:
            if isinstance(e, TransformError) and e.key is None:
                e.key = key
            logger.error(
                f"Echec du redimensionnement de {key} "
                f"({options.width}x{options.height}, {options.fit.value}): {e}"
            )
            raise

        self._cache.put(cache_key, key, name)
        return data

    # ------------------------------------------------------------------
    # Suppression et invalidation
    # ------------------------------------------------------------------

    async def delete_poster(self, key: AssetKey) -> bool:
        """
        Supprime l'original et la vignette d'une affiche, et purge le cache.

        Raises:
            AssetIOError: Si la suppression echoue sur le disque
        """
        try:
            deleted = await self._store.delete(key)
        except PosterError as e:
            logger.error(f"Echec de la suppression de l'affiche {key}: {e}")
            raise

        purged = self._cache.purge(key)
        self._sources = {s: k for s, k in self._sources.items() if k != key}
        logger.info(f"Affiche supprimee: {key} ({purged} entree(s) de cache purgee(s))")
        return deleted

    async def clear_cache(self) -> bool:
        """
        Vide le cache memoire et supprime les redimensionnements sur disque.

        Les originaux et vignettes ne sont pas touches.

        Raises:
            AssetIOError: Si un fichier de cache ne peut pas etre supprime
        """
        self._cache.invalidate_all()
        self._sources.clear()
        try:
            removed = await self._store.clear_derived()
        except PosterError as e:
            logger.error(f"Echec du nettoyage du cache d'affiches: {e}")
            raise
        logger.info(f"Cache d'affiches vide ({removed} fichier(s) supprime(s))")
        return True

    async def close(self) -> None:
        """Libere les ressources reseau du telechargeur."""
        await self._fetcher.close()
