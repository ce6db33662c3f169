#
# Build QR-Code.. a single fixed configuration: version 4, ECC level L,
# byte mode. Large enough for short EPC (GiroCode) payloads.
#
# Without a mask the symbol follows the simplified layout of the web page
# encoder it replaces: no masking and no format information. Such symbols
# are illustrative only and not conforming to ISO/IEC 18004. Passing a
# fixed mask pattern (0-7) reserves the format areas, applies the mask and
# writes the format information, which yields a conforming symbol.
#

import logging
import numpy as np
from . import phrasecoder
from . import galois
from .errors import StateError, BoundsError

log = logging.getLogger(__name__)


class encode(object):
    #
    QR_BLACK = 0        # final pixel in black
    QR_WHITE = 255      # final pixel in white
    QR_UNUSED = 64      # temporary pixel not in use

    # ECC levels
    QR_ECC_L = 'L'

    #
    QR_DIR_UP = 0
    QR_DIR_DOWN = 1

    # Encoder life cycle
    QR_STATE_EMPTY = 0
    QR_STATE_STAGED = 1
    QR_STATE_BUILT = 2

    # BCH(15,5) generator and XOR mask for the format information
    QR_FORMAT_GEN = 0b10100110111
    QR_FORMAT_MASK = 0b101010000010010

    QR_NUM_MASKS = 8

    # Internal class for grouping QR-code encoding information.
    class eccInfo(object):
        def __init__(self, ver, dc, ec, g1b, g1dc, g2b, g2dc, lev):
            self.data_codewords = dc
            self.ecc_codewords = ec
            self.group1blocks = g1b
            self.group1data_codewords = g1dc
            self.group2blocks = g2b
            self.group2data_codewords = g2dc
            self.version = ver
            self.ecc_level = lev

        def get_num_row(self):
            return self.group1blocks+self.group2blocks

        def get_max_col(self):
            return max(self.group1data_codewords, self.group2data_codewords)

        def get_total_codewords(self):
            return self.data_codewords + self.ecc_codewords * self.get_num_row()

    # finder pattern
    finder_ =   np.array(
                [QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,
                 QR_BLACK,QR_WHITE,QR_WHITE,QR_WHITE,QR_WHITE,QR_WHITE,QR_BLACK,
                 QR_BLACK,QR_WHITE,QR_BLACK,QR_BLACK,QR_BLACK,QR_WHITE,QR_BLACK,
                 QR_BLACK,QR_WHITE,QR_BLACK,QR_BLACK,QR_BLACK,QR_WHITE,QR_BLACK,
                 QR_BLACK,QR_WHITE,QR_BLACK,QR_BLACK,QR_BLACK,QR_WHITE,QR_BLACK,
                 QR_BLACK,QR_WHITE,QR_WHITE,QR_WHITE,QR_WHITE,QR_WHITE,QR_BLACK,
                 QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK],
                 np.uint8).reshape(7,7)

    # alignment pattern
    alignment_ =np.array(
                [QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,
                 QR_BLACK,QR_WHITE,QR_WHITE,QR_WHITE,QR_BLACK,
                 QR_BLACK,QR_WHITE,QR_BLACK,QR_WHITE,QR_BLACK,
                 QR_BLACK,QR_WHITE,QR_WHITE,QR_WHITE,QR_BLACK,
                 QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK,QR_BLACK],np.uint8).reshape(5,5)

    # alignment pattern centre rows/columns per version
    alignment_loc_ = {
            4: (6, 26)}

    ecc_table_ = {
        # "version-level",data codewords,ecc codewords, grp1 # blks, gpr1 # data codewords, grp2 # blks, gpr2 # data codewords
        "4-L":eccInfo(4,80,20,1,80,0,0,0b01)}   # 33x33

    @staticmethod
    def get_dimension_by_version(version:int)->int:
        if (version < 1 or version > 40):
            raise ValueError("Version can be between 1 to 40")

        return 4 * version + 17

    @staticmethod
    def get_eccInfo(version_level:str)->eccInfo:
        if (version_level not in encode.ecc_table_):
            raise ValueError(f"Unsupported version and level '{version_level}'")

        return encode.ecc_table_[version_level]

    @staticmethod
    def get_format_bits(ecc_level:int, mask:int)->int:
        """15 bit format information: 2 bits level, 3 bits mask, 10 bits BCH."""
        data = (ecc_level << 3) | mask
        rem = data << 10

        while (rem.bit_length() >= encode.QR_FORMAT_GEN.bit_length()):
            rem ^= encode.QR_FORMAT_GEN << (rem.bit_length() - encode.QR_FORMAT_GEN.bit_length())

        return ((data << 10) | rem) ^ encode.QR_FORMAT_MASK

    @staticmethod
    def is_masked_(mask:int, row:int, col:int)->bool:
        if (mask == 0):
            # (row + column) mod 2 == 0
            return (row + col) % 2 == 0
        elif (mask == 1):
            # (row) mod 2 == 0
            return row % 2 == 0
        elif (mask == 2):
            # (column) mod 3 == 0
            return col % 3 == 0
        elif (mask == 3):
            # (row + column) mod 3 == 0
            return (row + col) % 3 == 0
        elif (mask == 4):
            # ( floor(row / 2) + floor(column / 3) ) mod 2 == 0
            return (row // 2 + col // 3) % 2 == 0
        elif (mask == 5):
            # ((row * column) mod 2) + ((row * column) mod 3) == 0
            return ((row * col) % 2) + ((row * col) % 3) == 0
        elif (mask == 6):
            # ( ((row * column) mod 2) + ((row * column) mod 3) ) mod 2 == 0
            return (((row * col) % 2) + ((row * col) % 3)) % 2 == 0
        else:   # (mask == 7):
            # ( ((row + column) mod 2) + ((row * column) mod 3) ) mod 2 == 0
            return (((row + col) % 2) + ((row * col) % 3)) % 2 == 0

    #
    def prep_finder_patterns(self):
        d = self.get_dimension()

        # upper left
        self.qr[0:7,0:7]   = encode.finder_
        # upper right
        self.qr[0:7,d-7:d] = encode.finder_
        # lower left
        self.qr[d-7:d,0:7] = encode.finder_

    #
    def prep_separators(self):
        d = self.get_dimension()

        # rows
        for n in range(0,8):
            self.qr[7,n]     = encode.QR_WHITE
            self.qr[7,d-n-1] = encode.QR_WHITE
            self.qr[d-8,n]   = encode.QR_WHITE

        # columns
        for n in range(0,8):
            self.qr[n,7]     = encode.QR_WHITE
            self.qr[d-n-1,7] = encode.QR_WHITE
            self.qr[n,d-8]   = encode.QR_WHITE

    #
    def prep_timing_patterns(self):
        d = self.get_dimension()

        # seventh row and seventh column, dark on even positions
        for n in range(8,d-8):
            pixel = encode.QR_BLACK if n % 2 == 0 else encode.QR_WHITE
            self.qr[6,n] = pixel
            self.qr[n,6] = pixel

    #
    def prep_alignment_patterns(self):
        loc = encode.alignment_loc_.get(self.ecc_info.version, ())

        for row in loc:
            for col in loc:
                # collides with a finder or timing pattern
                if (self.qr[row,col] != encode.QR_UNUSED):
                    continue

                self.qr[row-2:row+3,col-2:col+3] = encode.alignment_

    #
    def format_positions_(self):
        d = self.get_dimension()

        # around the upper left finder pattern
        first = [(8,n) for n in range(6)] + [(8,7),(8,8),(7,8)] + [(n,8) for n in range(5,-1,-1)]
        # split between lower left and upper right
        second = [(n,8) for n in range(d-1,d-8,-1)] + [(8,n) for n in range(d-8,d)]

        return first, second

    #
    def insert_level_mask(self, mask=None):
        if (mask is None):
            # just reserve
            fmt = 0
        else:
            fmt = encode.get_format_bits(self.ecc_info.ecc_level, mask)

        for pos in self.format_positions_():
            for i,(row,col) in enumerate(pos):
                bit = (fmt >> (14 - i)) & 1
                self.qr[row,col] = encode.QR_BLACK if bit else encode.QR_WHITE

        # dark module
        self.qr[4*self.ecc_info.version+9,8] = encode.QR_BLACK

    #
    def calc_code_ecc_arrays(self, phrase : bytes):
        ei = self.ecc_info

        ewds = []
        cwds = []

        # divide phrase into group1 blocks.. group1 is always >= 1
        stp = ei.group1data_codewords

        for n in range(ei.group1blocks):
            cwd = bytes(phrase[n*stp:(n+1)*stp])
            cwds.append(cwd)
            ewds.append(galois.rs_encoder.encode(cwd,ei.ecc_codewords))

        # divide phrase into group2 blocks.. group2 may be 0 i.e. non-existent
        sta = ei.group1blocks*stp
        stp = ei.group2data_codewords

        for n in range(ei.group2blocks):
            cwd = bytes(phrase[sta+n*stp:sta+(n+1)*stp])
            cwds.append(cwd)
            ewds.append(galois.rs_encoder.encode(cwd,ei.ecc_codewords))

        return cwds,ewds

    #
    def interleave_code_ecc_arrays(self, cwds : list, ewds : list) -> bytearray:
        dst = bytearray()

        # data
        for cols in range(self.ecc_info.get_max_col()):
            for rows in range(self.ecc_info.get_num_row()):
                if (cols < len(cwds[rows])):
                    dst.append(cwds[rows][cols])

        # ecc
        for cols in range(self.ecc_info.ecc_codewords):
            for rows in range(self.ecc_info.get_num_row()):
                dst.append(ewds[rows][cols])

        return dst

    #
    def walk_(self):
        # column pairs from the right, zig-zagging up and down
        d = self.get_dimension()
        x = d - 1
        direction = encode.QR_DIR_UP

        while (x > 0):
            # skip the vertical timing pattern
            if (x == 6):
                x -= 1

            if (direction == encode.QR_DIR_UP):
                rows = range(d-1,-1,-1)
            else:
                rows = range(d)

            for y in rows:
                yield y,x
                yield y,x-1

            direction = encode.QR_DIR_DOWN if direction == encode.QR_DIR_UP else encode.QR_DIR_UP
            x -= 2

    #
    def encode_layout(self, codewords : bytearray):
        total = len(codewords) * 8
        n = 0

        for y,x in self.walk_():
            if (self.qr[y,x] != encode.QR_UNUSED):
                continue

            # remainder modules stay light
            dark = False

            if (n < total):
                dark = (codewords[n // 8] >> (7 - n % 8)) & 1 == 1
                n += 1

            self.qr[y,x] = encode.QR_BLACK if dark else encode.QR_WHITE

    #
    def encode_mask(self, mask : int):
        d = self.get_dimension()

        for row in range(d):
            for col in range(d):
                # only data modules are flipped
                if (self.qr_msk[row,col] == encode.QR_UNUSED and encode.is_masked_(mask,row,col)):
                    self.qr[row,col] ^= 0xff

    #
    def add_data(self, phrase : str):
        if (self.state == encode.QR_STATE_BUILT):
            raise StateError("Cannot add data after make()")

        self.pc.add_phrase(phrase)
        self.state = encode.QR_STATE_STAGED

    #
    def make(self):
        if (self.state == encode.QR_STATE_BUILT):
            raise StateError("make() can be called only once")

        ei = self.ecc_info
        ph = self.pc.encode_phrases(ei.data_codewords)
        dat,ecc = self.calc_code_ecc_arrays(ph)

        if (log.isEnabledFor(logging.DEBUG)):
            for n in range(len(dat)):
                log.debug("block %d code words %s", n, dat[n].hex())
                log.debug("block %d ECC %s", n, ecc[n].hex())

        res = self.interleave_code_ecc_arrays(dat,ecc)
        self.encode_layout(res)

        if (self.mask is not None):
            self.encode_mask(self.mask)
            self.insert_level_mask(self.mask)

        log.debug("version %d-%s, mask %s, %d codewords placed",
                  ei.version, encode.QR_ECC_L, self.mask, len(res))

        # frozen from now on
        self.qr.setflags(write=False)
        self.state = encode.QR_STATE_BUILT

    #
    def check_built_(self):
        if (self.state != encode.QR_STATE_BUILT):
            raise StateError("QR-code has not been built, call make() first")

    #
    def is_dark(self, row : int, col : int) -> bool:
        self.check_built_()
        d = self.get_dimension()

        if (row < 0 or row >= d or col < 0 or col >= d):
            raise BoundsError(f"Module ({row},{col}) outside the {d}x{d} symbol")

        return bool(self.qr[row,col] == encode.QR_BLACK)

    def get_dimension(self):
        return self.dimension

    #
    def get_modules(self) -> np.ndarray:
        """Boolean matrix of the symbol, True is a dark module."""
        self.check_built_()
        modules = self.qr == encode.QR_BLACK
        modules.setflags(write=False)
        return modules

    #
    def get_qr(self) -> np.ndarray:
        """The symbol as an 8 bit grayscale image, one pixel per module."""
        self.check_built_()
        return self.qr

    #
    def get_mask(self):
        return self.mask

    #
    def get_version_level(self):
        return self.ecc_info.version,self.ecc_info.ecc_level

    #
    def __init__(self, version_level : str="4-L", mask=None):
        if (mask is not None and mask not in range(encode.QR_NUM_MASKS)):
            raise ValueError(f"Mask pattern must be between 0 and 7, got {mask}")

        self.version_level = version_level
        self.mask = mask
        self.state = encode.QR_STATE_EMPTY

        # Prepare for encoding
        self.ecc_info = encode.get_eccInfo(version_level)
        self.pc = phrasecoder.encode(version=self.ecc_info.version)

        # Reserve 2-dimensional space for QR code "graphics"
        d = encode.get_dimension_by_version(self.ecc_info.version)
        self.qr = np.full((d,d),encode.QR_UNUSED,dtype=np.uint8,order='C')
        self.dimension = d

        # Build basic layout..
        self.prep_finder_patterns()
        self.prep_separators()
        self.prep_timing_patterns()
        self.prep_alignment_patterns()

        if (mask is not None):
            self.insert_level_mask()    # just reserve

        # Going to be static..
        self.qr_msk = self.qr.copy()

    def generate_qr_code(self, phrase : str) -> np.ndarray:
        self.add_data(phrase)
        self.make()
        return self.qr
