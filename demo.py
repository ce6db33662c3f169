import argparse
import logging

from giroqr import epc
from giroqr import qrcoder as q
from giroqr import render


def main():
    parser = argparse.ArgumentParser(description="Create a GiroCode (EPC QR) for a donation")
    parser.add_argument("--name", default="ACME")
    parser.add_argument("--iban", default="DE00 0000 0000 0000 0000 00")
    parser.add_argument("--bic", default="")
    parser.add_argument("--amount", default="10.00")
    parser.add_argument("--purpose", default="Donation")
    parser.add_argument("--mask", type=int, default=0,
                        help="fixed mask pattern 0-7, -1 for the unmasked layout")
    parser.add_argument("--scale", type=int, default=4)
    parser.add_argument("--out", help="save to a file instead of showing the image")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logger = logging.getLogger("demo")

    payload = epc.build_epc_payload(args.name, args.iban, args.bic, args.amount, args.purpose)
    logger.info("payload of %d characters", len(payload))

    qr = q.encode("4-L", mask=None if args.mask < 0 else args.mask)
    qr.add_data(payload)
    qr.make()

    ima = render.to_image(qr.get_modules(), scale=args.scale)

    if (args.out):
        ima.save(args.out)
        logger.info("saved %s", args.out)
    else:
        ima.show()


if (__name__ == "__main__"):
    main()
