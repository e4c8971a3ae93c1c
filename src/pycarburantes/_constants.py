"""Internal constants shared across the library."""

BASE_URL = "https://sedeaplicaciones.minetur.gob.es/ServiciosRESTCarburantes/PreciosCarburantes/EstacionesTerrestres/"
USER_AGENT = "pycarburantes/1.0"

#: Key prefixes that mark a fuel-price field in a wire record.
PRICE_PREFIXES: tuple[str, ...] = ("Price ", "Precio ")

#: Envelope keys of the public fuel-price service.
STATION_LIST_KEY = "ListaEESSPrecio"
RESULT_KEY = "ResultadoConsulta"
RESULT_OK = "OK"

#: Mean Earth radius used by the haversine formula.
EARTH_RADIUS_KM = 6371.0
