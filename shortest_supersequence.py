import argparse
import gzip
import logging
import os
import sys
from functools import partial
from typing import List, Tuple

from Bio import SeqIO

from banded_lcs import is_subsequence, is_supersequence_of_all, merge_all_sequences
from order_search import search_orders

# Constants
FASTQ_EXTENSIONS = ['.fastq', '.fq']
FASTA_EXTENSIONS = ['.fasta', '.fa', '.fna', '.faa']
LINE_LENGTH = 80


def parse_tokens(tokens: List[str]) -> Tuple[List[str], int]:
    '''Parse "k seq_1 ... seq_k t" into the sequences and the deletion threshold.'''
    if not tokens:
        raise ValueError('Expected the number of sequences, the sequences and a threshold.')
    try:
        count = int(tokens[0])
    except ValueError:
        raise ValueError(f'Number of sequences must be an integer, got "{tokens[0]}".')
    if count < 0:
        raise ValueError(f'Number of sequences must not be negative, got {count}.')
    if len(tokens) < count + 2:
        raise ValueError(f'Expected {count} sequences followed by a threshold, got {len(tokens) - 1} tokens.')
    sequences = tokens[1:count + 1]
    try:
        threshold = int(tokens[count + 1])
    except ValueError:
        raise ValueError(f'Threshold must be an integer, got "{tokens[count + 1]}".')
    return sequences, threshold


def detect_file_type(file_path: str) -> str:
    name = file_path[:-3] if file_path.endswith('.gz') else file_path
    if name.endswith(tuple(FASTQ_EXTENSIONS)):
        return 'fastq'
    if name.endswith(tuple(FASTA_EXTENSIONS)):
        return 'fasta'
    raise ValueError(f'Unrecognized file extension for {file_path}. Expected FASTA (.fasta, .fa, .fna, .faa) or FASTQ (.fastq, .fq).')


def read_sequences(file_path: str) -> List[str]:
    file_type = detect_file_type(file_path)
    opener = gzip.open if file_path.endswith('.gz') else open
    with opener(file_path, 'rt') as handle:
        sequences = [str(record.seq).upper() for record in SeqIO.parse(handle, file_type)]
    logging.info(f'Read {len(sequences)} sequences from {file_path}')
    return sequences


def write_supersequence(scs: str, file_path: str) -> None:
    with open(file_path, 'w') as f:
        f.write(f'>scs length={len(scs)}\n')
        for i in range(0, len(scs), LINE_LENGTH):
            f.write(scs[i:i + LINE_LENGTH] + '\n')


def find_shortest_supersequence(sequences: List[str], threshold: int, num_workers: int = 1) -> Tuple[Tuple[str, ...], str]:
    '''Chain-merge every distinct order of sequences and return the order giving the shortest result.'''
    merge = partial(merge_all_sequences, threshold=threshold)
    return search_orders(sequences, merge, key=len, num_workers=num_workers)


def format_result(scs: str) -> str:
    return f'SCS: {scs}\nSCS Length: {len(scs)}\n\n'


def main(argv=None):
    parser = argparse.ArgumentParser(description='Shortest common supersequence of near-duplicate sequences.')
    parser.add_argument('-i', '--input_file', help='FASTA/FASTQ file with the sequences. Reads "k seq_1 ... seq_k t" from stdin if omitted.')
    parser.add_argument('-d', '--deletions', type=int, help='Deletion threshold, required with --input_file.')
    parser.add_argument('-o', '--output_file', help='Also write the supersequence to this FASTA file.')
    parser.add_argument('-t', '--num_threads', type=int, default=1, help='Number of worker processes. Default is 1.')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    if args.input_file:
        if not os.path.exists(args.input_file):
            raise ValueError(f'The input file "{args.input_file}" does not exist.')
        if args.deletions is None:
            raise ValueError('A deletion threshold (-d) is required with --input_file.')
        sequences = read_sequences(args.input_file)
        if not sequences:
            raise ValueError('No sequences detected!')
        threshold = args.deletions
    else:
        sequences, threshold = parse_tokens(sys.stdin.read().split())

    max_threads = os.cpu_count() or 1
    if args.num_threads < 1 or args.num_threads > max_threads:
        logging.warning(f'Adjusting thread count to be between 1 and {max_threads}.')
        args.num_threads = min(max(args.num_threads, 1), max_threads)

    logging.info(f'Merging {len(sequences)} sequences with deletion threshold {threshold}')
    _, scs = find_shortest_supersequence(sequences, threshold, args.num_threads)
    logging.info(f'Best length {len(scs)}')

    if not is_supersequence_of_all(scs, sequences):
        missing = [seq for seq in sequences if not is_subsequence(seq, scs)]
        logging.warning(f'{len(missing)} sequence(s) are not contained in the result.')

    sys.stdout.write(format_result(scs))
    if args.output_file:
        write_supersequence(scs, args.output_file)


if __name__ == '__main__':
    main()
