from .search_service import SearchCriteria, CaseSearchResult, search_cases, run_case_search
from .photo_matching import ComparePhotoPair, match_photos, iter_photo_pairs
from .compare_service import compare_visit_photos, run_compare_visit_photos
from .portfolio_service import list_portfolio_items, run_list_portfolio_items

__all__ = [
    "SearchCriteria",
    "CaseSearchResult",
    "search_cases",
    "run_case_search",
    "ComparePhotoPair",
    "match_photos",
    "iter_photo_pairs",
    "compare_visit_photos",
    "run_compare_visit_photos",
    "list_portfolio_items",
    "run_list_portfolio_items",
]
