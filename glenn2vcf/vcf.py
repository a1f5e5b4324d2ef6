import sys
import logging
from .exceptions import VariantError, VcfWriteError


class Variant:
    def __init__(self, chromosome, position, ref, alts, genotype, quality=0):
        # position is 1-based
        if len(alts) == 0:
            raise VariantError("Variant at position %d has no alt alleles" % position)
        self.chromosome = chromosome
        self.position = position
        self.ref = ref
        self.alts = alts
        self.genotype = genotype
        self.quality = quality

    def __eq__(self, other):
        if not isinstance(other, Variant):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __repr__(self):
        return "Variant(%s:%d %s -> %s, %s)" % (self.chromosome, self.position, self.ref, ",".join(self.alts), self.genotype)

    def to_tuple(self):
        return (self.chromosome, self.position, self.ref, tuple(self.alts), self.genotype, self.quality)

    def to_vcf_line(self):
        return "\t".join([self.chromosome, str(self.position), ".", self.ref, ",".join(self.alts),
                          str(self.quality), ".", ".", "GT", self.genotype])


def vcf_header(sample_name):
    return ("##fileformat=VCFv4.2\n"
            "##FORMAT=<ID=GT,Number=1,Type=String,Description=\"Genotype\">\n"
            "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\tFORMAT\t%s\n" % sample_name)


class VcfWriter:
    """Writes a single-sample VCF. Only the process owning the writer writes records."""

    def __init__(self, out_file, sample_name="SAMPLE"):
        self._out_file = out_file
        self.sample_name = sample_name
        self.n_written = 0
        self._out_file.write(vcf_header(sample_name))

    @classmethod
    def open(cls, file_name=None, sample_name="SAMPLE"):
        if file_name is None or file_name == "-":
            return cls(sys.stdout, sample_name)
        try:
            out_file = open(file_name, "w")
        except OSError as e:
            raise VcfWriteError("Could not write %s: %s" % (file_name, e))
        return cls(out_file, sample_name)

    def write(self, variant):
        self._out_file.write(variant.to_vcf_line() + "\n")
        self.n_written += 1

    def write_all(self, variants):
        for variant in variants:
            self.write(variant)

    def close(self):
        self._out_file.flush()
        if self._out_file is not sys.stdout:
            self._out_file.close()
        logging.info("Wrote %d variants" % self.n_written)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
