"""
ASV benchmarks for MerkleTree and IndexedMerkleTree.

Covers batch construction, one-value-at-a-time insertion (a full rebuild
per call), path derivation and path verification.
"""

import gc

from merkle_trees import MerkleTree, create_merkle_tree

from benchmarks.benchmark_utils import CONFIG, BaseBenchmark, BenchmarkUtils


class MerkleTreeBuildBenchmarks(BaseBenchmark):
    """Benchmarks for building a tree from a batch of values."""

    params = [
        [10, 100, 1000, 10000],           # size
        [False, True],                    # indexed
        ['uniform', 'duplicates'],        # data distribution
    ]
    param_names = ['size', 'indexed', 'distribution']

    min_run_count = 5

    def setup(self, size, indexed, distribution):
        super().setup(size, indexed, distribution)
        self.values = BenchmarkUtils.generate_deterministic_values(size, distribution=distribution)
        self.verify_tree(create_merkle_tree(self.values, indexed=indexed))
        gc.collect()
        gc.disable()

    def time_batch_construction(self, size, indexed, distribution):
        create_merkle_tree(self.values, indexed=indexed)


class MerkleTreeAddBenchmarks(BaseBenchmark):
    """Sequential ``add`` calls; each one rebuilds from all leaves."""

    params = [
        [10, 100, 500],
        [False, True],
    ]
    param_names = ['size', 'indexed']

    def setup(self, size, indexed):
        super().setup(size, indexed)
        self.values = BenchmarkUtils.generate_deterministic_values(size)
        self.verify_tree(create_merkle_tree(self.values, indexed=indexed))
        gc.collect()
        gc.disable()

    def time_sequential_add(self, size, indexed):
        tree = create_merkle_tree(indexed=indexed)
        for value in self.values:
            tree.add(value)


class MerkleTreePathBenchmarks(BaseBenchmark):
    """Benchmarks for path derivation and verification."""

    params = [
        [100, 1000, 10000],
        [False, True],
    ]
    param_names = ['size', 'indexed']

    # Trees and lookups shared across repeats of the same parameters
    _tree_cache = {}

    def setup(self, size, indexed):
        super().setup(size, indexed)
        cache_key = (size, indexed, CONFIG.seed)
        if cache_key not in self._tree_cache:
            values = BenchmarkUtils.generate_deterministic_values(size)
            tree = create_merkle_tree(values, indexed=indexed)
            lookups = BenchmarkUtils.create_lookup_values(values, num_lookups=200)
            self._tree_cache[cache_key] = (tree, lookups, [tree.path(v) for v in lookups])
        self.tree, self.lookups, self.paths = self._tree_cache[cache_key]
        self.verify_tree(self.tree)
        gc.collect()
        gc.disable()

    def time_path(self, size, indexed):
        path = self.tree.path
        for value in self.lookups:
            path(value)

    def time_verify(self, size, indexed):
        root = self.tree.root
        verify = MerkleTree.verify
        for value, proof in zip(self.lookups, self.paths):
            verify(value, proof, root)
