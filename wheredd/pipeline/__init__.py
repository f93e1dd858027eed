from wheredd.pipeline.geometry import clean_clauses, cleaned_cte, geometry_clean_clause
from wheredd.pipeline.pivot import OUTPUT_COLUMNS, pivot_select, pivot_union
from wheredd.pipeline.queries import release_table_query, source_table_query
