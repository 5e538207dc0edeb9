# lightgateway

Building blocks for a LoRaWAN light gateway: parsing and encoding of
LoRaWAN frames, Helium subnet address translation, and construction of
proof-of-coverage beacons and the transmit packets that carry them.

The package has no third-party dependencies.

## Install

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Modules

- `lightgateway.lorawan`: read and write LoRaWAN PHY payloads.
  `PHYPayload.read(direction, data)` decodes a frame and
  `PHYPayload.to_bytes()` encodes it again; `PHYPayload.proprietary(payload)`
  builds a proprietary frame. Frames are made of `MHDR`, `Fhdr`,
  `FCtrlUplink`/`FCtrlDownlink`, `MACPayload`, `FRMPayload`, `JoinRequest`
  and `JoinAccept`. Malformed frames raise `InvalidPacketSizeError`,
  `InvalidPacketTypeError`, `InvalidFPortForFoptsError` or the base
  `LoraWanError` (for example on truncated data).
- `lightgateway.subnet`: DevAddr and NetID arithmetic for an ordered list
  of NetIDs: `parse_netid`, `netid_type`, `nwk_addr`, `devaddr`,
  `subnet_from_devaddr`, `devaddr_from_subnet`, `is_local_devaddr`,
  `is_local_netid`, `netid_addr_range`, `netid_size`.
- `lightgateway.beacon`: `Entropy` (local entropy from the operating
  system, entropy wrapping given data, and a JSON form with base64 data)
  and `Beacon.create(remote_entropy, local_entropy, region_params)`, which
  hashes both entropies with SHA-256 and uses the digest to seed a
  ChaCha12 generator that picks the frequency from the `RegionParam`
  list and a payload size of 5 to 10 bytes. `Beacon.to_report()` gives an
  unsigned `BeaconReport`.
- `lightgateway.gateway`: `beacon_to_pull_resp(beacon, tx_power)` turns a
  beacon into an immediate, non-inverted `TxPk` transmit request;
  `TxPk.to_dict()` gives its JSON object form.
- `lightgateway.curl`: `get(url, args, parse)` runs `curl <args> -f <url>`
  and passes its output to `parse`; failures raise `CurlExitError`,
  `CurlSignalError` or `CurlError`. It needs the `curl` program on the
  path.
- `lightgateway.keypair_args`: `KeypairArgs.from_uri(url)` reads the query
  arguments of a keypair URI; `KeypairArgs.get(name, default, convert)`
  converts one, for example with `Network.parse`.
- `lightgateway.info_keys`: `parse_info_keys("fw,key,name")` gives a list
  of `InfoKey` values; unknown keys raise `InfoKeyParseError`.
- `lightgateway.local_api`: `listen_addr(port)` and `connect_uri(port)`
  for the local API on 127.0.0.1.
- `lightgateway.errors`: the package's error hierarchy, rooted at `Error`.

## Example

    from lightgateway.lorawan import Direction, PHYPayload

    frame = PHYPayload.proprietary(b"poc_beacon_data")
    data = frame.to_bytes()
    assert PHYPayload.read(Direction.UPLINK, data) == frame

    from lightgateway.subnet import parse_netid
    assert parse_netid(0xFC00D410) == 0xC00035

    from lightgateway.beacon import Beacon, Entropy, RegionParam
    from lightgateway.gateway import beacon_to_pull_resp

    beacon = Beacon.create(
        Entropy.from_data(b"remote"),
        Entropy.local(),
        [RegionParam(channel_frequency=868_100_000)],
    )
    txpk = beacon_to_pull_resp(beacon, 27)
    print(beacon.beacon_id(), txpk.to_dict())

## What this package does not do

This is a library only. It has no command-line program and runs no
service: it does not talk to a packet forwarder over UDP, does not serve
or call the local API (it only computes its addresses), does not fetch
entropy or submit beacon and witness reports, and does not load,
generate or store keypairs or sign anything. Those parts are left to
the application that uses it.