from .api import NetworkCrmClient
from .query_cache import QueryClient, QueryKey, QueryKind, QueryState, Mutation, INVALIDATES
from .queries import CrmQueries
