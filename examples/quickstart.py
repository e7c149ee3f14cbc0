# %% [markdown]
# # docsim quickstart
#
# Flag documents that resemble known reference content.
#
# | Part | Topic |
# |------|-------|
# | 1 | Pairwise scores |
# | 2 | One document against a corpus |
# | 3 | Extracted documents and Polars |

# %%
import polars as pl

import docsim as ds

# %% [markdown]
# ## Part 1: Pairwise scores
#
# Every scorer returns a percentage between 0 and 100.

# %%
a = "Invoice 2041 for consulting services rendered in March"
b = "Invoice 2042 for consulting services rendered in April"

for method in ds.SimilarityMethod:
    print(f"{method.value:>12}: {ds.calculate_similarity(a, b, method):6.2f}")

print("edit distance:", ds.levenshtein(a, b))

# %% [markdown]
# ## Part 2: One document against a corpus
#
# `compare` runs the length pre-filter and the selected scorer for every
# reference and keeps those at or above the threshold.

# %%
references = [
    "The quick brown fox jumps",
    "A completely different text",
    "The quick brown fox",
]
for match in ds.compare("The quick brown fox", references, method="hybrid", threshold=50.0):
    print(match.reference_index, round(match.similarity_percentage, 1))

# Large corpora can be spread over a worker pool
corpus = references * 200
matches = ds.compare("The quick brown fox", corpus, threshold=50.0, executor="thread", max_workers=4)
print(f"{len(matches)} matches in {len(corpus)} references")

# %% [markdown]
# ## Part 3: Extracted documents and Polars

# %%
handler = ds.TextHandler()
documents = [
    ds.extract(handler, b"The quick brown fox", "a.txt", "text/plain"),
    ds.extract(handler, b"%PDF-1.7 ...", "b.pdf", "application/pdf"),
    ds.extract(handler, b"The quick brown fox jumps", "c.txt", "text/plain"),
]
for match in ds.compare_extracted("The quick brown fox", documents, threshold=50.0):
    print(documents[match.reference_index].name, round(match.similarity_percentage, 1))

df = pl.DataFrame({"body": references})
print(ds.compare_dataframe(df, "body", "The quick brown fox", threshold=50.0))
